class AppStatusCode:
    """Application level status codes returned inside the JSON envelope."""

    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "200"
    CREATED_SUCCESSFULLY = "201"

    # Generic failures
    OPERATION_FAILED = "1000"
    INVALID_INPUT = "1001"
    RESOURCE_NOT_FOUND = "1004"
    DUPLICATE_ENTRY = "1009"

    # Booking engine
    BOOKING_CONFLICT = "2001"
    INVALID_STATE_TRANSITION = "2002"

    # Authentication / authorization
    AUTHENTICATION_FAILED = "3001"
    ACCESS_FORBIDDEN = "3006"

    # External services
    EXTERNAL_SERVICE_ERROR = "5002"
