from enum import Enum


class ReportPeriod(str, Enum):
    LAST_MONTH = "1"
    LAST_3_MONTHS = "2"
    LAST_6_MONTHS = "3"
    LAST_YEAR = "4"


class ReportExportType(str, Enum):
    profit_loss = "profit-loss"
    outstanding = "outstanding"
    hotel_recap = "hotel-recap"
