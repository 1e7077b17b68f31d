class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"

    # Generic failures
    OPERATION_FAILED = "200"
    OPERATION_ERROR = "201"
    INVALID_INPUT = "202"
    REQUIRED_VALIDATION_ERROR = "203"
    NOT_FOUND = "204"
    DUPLICATE_ADD_ERROR = "205"
    REFERENTIAL_INTEGRITY_ERROR = "206"
    EXCHANGE_RATE_NOT_FOUND = "207"

    # Authentication
    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_USER_INVALID = "302"
    AUTHENTICATION_USER_INACTIVE = "303"
