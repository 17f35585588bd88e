import pytest
from pydantic import ValidationError

from app.models.user import Role
from app.schemas.rating import RatingIn
from app.schemas.store import StoreIn
from app.schemas.user import RegisterIn, UserCreate

VALID = {
    "name": "Alexandra Catherine Whitmore",
    "email": "alex@example.com",
    "address": "12 Harbour Lane",
    "password": "Secret@123",
    "confirmPassword": "Secret@123",
}


def _fields(exc: ValidationError) -> set[str]:
    return {str(e["loc"][0]) for e in exc.errors()}


class TestRegisterIn:

    def test_valid_payload(self):
        body = RegisterIn(**VALID)
        assert body.confirm_password == body.password

    def test_name_lower_bound_is_twenty(self):
        # 20 characters is the documented minimum, even though it is unusual
        RegisterIn(**{**VALID, "name": "A" * 20})
        with pytest.raises(ValidationError) as exc:
            RegisterIn(**{**VALID, "name": "A" * 19})
        assert _fields(exc.value) == {"name"}

    def test_name_upper_bound(self):
        with pytest.raises(ValidationError):
            RegisterIn(**{**VALID, "name": "A" * 61})

    @pytest.mark.parametrize("password", ["Short@1", "Waytoolong@123456", "secret@123", "Secret1234"])
    def test_password_rules(self, password):
        with pytest.raises(ValidationError) as exc:
            RegisterIn(**{**VALID, "password": password, "confirmPassword": password})
        assert "password" in _fields(exc.value)

    def test_confirmation_must_match(self):
        with pytest.raises(ValidationError) as exc:
            RegisterIn(**{**VALID, "confirmPassword": "Other@123"})
        assert _fields(exc.value) == {"confirmPassword"}

    def test_reports_every_failing_field(self):
        with pytest.raises(ValidationError) as exc:
            RegisterIn(name="short", email="not-an-email", address="x" * 401,
                       password="weak", confirmPassword="weak")
        assert {"name", "email", "address", "password"} <= _fields(exc.value)

    def test_address_is_required(self):
        payload = {k: v for k, v in VALID.items() if k != "address"}
        with pytest.raises(ValidationError) as exc:
            RegisterIn(**payload)
        assert _fields(exc.value) == {"address"}

    def test_admin_create_accepts_role(self):
        body = UserCreate(**VALID, role="store_owner")
        assert body.role is Role.STORE_OWNER

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            UserCreate(**VALID, role="superuser")


class TestStoreIn:

    def test_address_is_required(self):
        with pytest.raises(ValidationError) as exc:
            StoreIn(name="Corner Shop", email="shop@example.com")
        assert _fields(exc.value) == {"address"}

    def test_requires_name_and_email(self):
        with pytest.raises(ValidationError) as exc:
            StoreIn(name="", email="nope", address="x")
        assert _fields(exc.value) == {"name", "email"}

    def test_address_limit(self):
        StoreIn(name="Corner Shop", email="shop@example.com", address="x" * 400)
        with pytest.raises(ValidationError):
            StoreIn(name="Corner Shop", email="shop@example.com", address="x" * 401)


class TestRatingIn:

    @pytest.mark.parametrize("value", [1, 3, 5])
    def test_accepts_range(self, value):
        assert RatingIn(store_id=1, rating=value).rating == value

    @pytest.mark.parametrize("value", [0, 6, 2.5, True, "4"])
    def test_rejects_out_of_range_and_non_integers(self, value):
        with pytest.raises(ValidationError):
            RatingIn(store_id=1, rating=value)

    def test_store_id_must_be_an_integer(self):
        with pytest.raises(ValidationError):
            RatingIn(store_id="1", rating=3)

    def test_review_is_optional_and_unbounded(self):
        assert RatingIn(store_id=1, rating=4).review is None
        assert len(RatingIn(store_id=1, rating=4, review="x" * 10_000).review) == 10_000
