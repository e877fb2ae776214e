"""Sign-up and account recovery forms."""

from dataclasses import dataclass


@dataclass(slots=True)
class SignUpForm:
    login_id: str = ""
    password: str = ""
    confirm_password: str = ""
    name: str = ""
    email: str = ""
    phone_number: str = ""
    birth_date: str = ""
    branch_id: int = 0

    def to_payload(self) -> dict:
        return {
            "loginId": self.login_id,
            "password": self.password,
            "confirmPassword": self.confirm_password,
            "name": self.name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "birthDate": self.birth_date,
            "branchId": self.branch_id,
        }


@dataclass(slots=True)
class PasswordChangeEmailForm:
    login_id: str = ""
    email: str = ""
    phone_number: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.login_id and self.email and self.phone_number)

    def to_payload(self) -> dict:
        return {
            "loginId": self.login_id,
            "email": self.email,
            "phoneNumber": self.phone_number,
        }
