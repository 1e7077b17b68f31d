from enum import Enum


class UserRole(str, Enum):
    administrator = "administrator"
    staff = "staff"
