from pydantic import BaseModel, EmailStr, Field, StrictStr

# Schema for user authentication credentials
class UserLogin(BaseModel):
    email: EmailStr
    password: StrictStr = Field(min_length=8)

# Schema for user registration requests; role is checked against ROLES by the route
class UserCreate(BaseModel):
    name: StrictStr = Field(min_length=2)
    email: EmailStr
    password: StrictStr = Field(min_length=8)
    role: StrictStr = Field(min_length=2)

# Output schema for user profile details
class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True

# Schema for the login response
class Token(BaseModel):
    token: str
