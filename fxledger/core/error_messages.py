"""User-facing error messages — single source for every envelope error mapping."""

RESOURCE_NOT_FOUND = {"resource": "Requested resource does not exist or has been moved."}
TRANSACTION_NOT_FOUND = {"transaction": "No fx transaction found with the supplied parameter"}
TRANSACTIONS_NOT_FOUND = {
    "transactions": "No fx transactions found at the moment, please check back later!",
}
TRANSACTION_NOT_UPDATED = {
    "transaction": "We couldn't update the requested transaction, please try again.",
}
APPLICATION_ERROR = {"app": "We couldn't process your request at the moment, please try again."}

TRANSACTION_ID_MISSING = (
    "Please provide a transaction ID to get an fx transaction. Transaction ID must be "
    "a valid Hexdecimal string and 24 characters long. e.g. 507f191e810c19729de860ea"
)
TRANSACTION_ID_INVALID = (
    "Please provide a valid transaction ID to get an fx transaction. Transaction ID must be "
    "a valid Hexdecimal string and 24 characters long. e.g. 507f191e810c19729de860ea"
)
UPDATE_ID_INVALID = (
    "Transaction ID is required to update a record and must be a valid "
    "hexadecimal string of 24 characters."
)
UPDATE_TARGET_MISSING = (
    "No Transaction found with the provided ID. Please provide a valid transaction ID."
)

UNAUTHORIZED_NO_TOKEN = "Unauthorized Access: No Authorization token header provided"
UNAUTHORIZED_INVALID_TOKEN = "Unauthorized Access: Failed to authenticate token"
