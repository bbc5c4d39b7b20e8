from pydantic import BaseModel, StrictBool


# Input schema for a student signing a session
class EmargementPayload(BaseModel):
    presence: StrictBool


class EmargementResponse(BaseModel):
    id: int
    session_id: int
    etudiant_id: int
    presence: bool

    class Config:
        from_attributes = True


# A student signed on a session, as listed to the session's formateur
class AttendeeResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    session_id: int
    presence: bool
