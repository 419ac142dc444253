from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    email: EmailStr
    full_name: str | None = None

    model_config = {"from_attributes": True}


class UserCreate(UserBase):
    password: str = Field(min_length=6)


class VendorSignUp(UserCreate):
    business_name: str = Field(min_length=1)
    business_address: str | None = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserOut(UserBase):
    id: int
    role: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    redirect: str
