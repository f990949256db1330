import pytest

from stockroom.domain.errors import ValidationError
from stockroom.services.session_service import PASSWORD_KEY, USER_KEY


class TestLogin:
    def test_login_stores_user(self, session_service, redis_client):
        user = session_service.login("123456a", "password")

        assert user.name == "Admin User"
        assert user.section == "IT"
        assert redis_client.get(USER_KEY) is not None
        assert session_service.current_user() == user

    def test_no_user_before_login(self, session_service):
        assert session_service.current_user() is None

    @pytest.mark.parametrize("code", ["12345a", "1234567", "123456A", "abcdefg"])
    def test_bad_employee_code_format(self, session_service, code):
        with pytest.raises(ValidationError):
            session_service.login(code, "password")

    def test_blank_fields(self, session_service):
        with pytest.raises(ValidationError):
            session_service.login("", "")

    def test_wrong_password(self, session_service):
        with pytest.raises(PermissionError):
            session_service.login("123456a", "nope")

        assert session_service.current_user() is None

    def test_unknown_employee(self, session_service):
        with pytest.raises(PermissionError):
            session_service.login("654321b", "password")

    def test_logout(self, session_service, logged_in):
        session_service.logout()

        assert session_service.current_user() is None


class TestChangePassword:
    def test_change_and_login_with_new_password(self, session_service, logged_in, redis_client):
        session_service.change_password("password", "s3cret!", "s3cret!")

        assert redis_client.get(PASSWORD_KEY) == "s3cret!"
        session_service.logout()
        with pytest.raises(PermissionError):
            session_service.login("123456a", "password")
        assert session_service.login("123456a", "s3cret!").id == 1

    def test_requires_login(self, session_service):
        with pytest.raises(PermissionError):
            session_service.change_password("password", "s3cret!", "s3cret!")

    def test_mismatch(self, session_service, logged_in):
        with pytest.raises(ValidationError):
            session_service.change_password("password", "s3cret!", "s3cret?")

    def test_too_short(self, session_service, logged_in):
        with pytest.raises(ValidationError):
            session_service.change_password("password", "abc", "abc")

    def test_wrong_current(self, session_service, logged_in, redis_client):
        with pytest.raises(PermissionError):
            session_service.change_password("wrong", "s3cret!", "s3cret!")

        assert redis_client.get(PASSWORD_KEY) is None
