from fastapi import status


class RentalAppError(Exception):
    """Base class for errors raised by the services and stores."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class ValidationError(RentalAppError):
    """A required field is missing from the request."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(RentalAppError):
    """A referenced entity does not exist and the operation cannot proceed."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(RentalAppError):
    """The operation would break a cross-entity rule (e.g. client with active rentals)."""

    status_code = status.HTTP_400_BAD_REQUEST


class StoreFailure(RentalAppError):
    """The entity store or blob store call failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class EntityNotFoundError(StoreFailure):
    """Raised by the entity store when no entity has the given keys."""

    def __init__(self, table: str, partition_key: str, row_key: str):
        super().__init__(
            f"The specified resource does not exist. "
            f"(table={table}, partitionKey={partition_key}, rowKey={row_key})"
        )
        self.table = table
        self.partition_key = partition_key
        self.row_key = row_key
