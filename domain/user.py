from pydantic import BaseModel

ROLE_TEACHER = "teacher"
ROLE_ADMIN = "admin"


class Identity(BaseModel):
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_teacher(self) -> bool:
        return self.role == ROLE_TEACHER
