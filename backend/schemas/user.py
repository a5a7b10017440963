from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for self-registration requests
class UserCreate(UserBase):
    name: str = Field(min_length=1)
    password: str = Field(min_length=1)

# Schema for accounts created by an admin
class AdminUserCreate(UserCreate):
    is_admin: bool = False
    is_active: bool = True

# Partial update by an admin; omitted fields are left unchanged
class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None
    is_active: Optional[bool] = None

# Output schema for user profile details (never includes the password hash)
class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_admin: bool
    is_active: bool

# Schema for the login response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
