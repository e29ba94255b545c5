# app/schemas/account.py
from sqlmodel import SQLModel


class DeleteUserResult(SQLModel):
    """
    Success body of the delete-user function.

    alreadyDeleted is only present when the auth user was gone before
    this call; field names follow the JSON contract used by the web client.
    """

    success: bool = True
    alreadyDeleted: bool | None = None

    def to_json(self) -> dict:
        return self.model_dump(exclude_none=True)
