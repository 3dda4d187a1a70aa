from datetime import datetime, timedelta, timezone

from jose import jwt

from loyalty.core.security import create_access_token


def test_profile_returns_own_fields(api, customer):
    r = api.profile(customer["token"])
    assert r.status_code == 200
    assert r.json() == {
        "id": customer["user"]["id"],
        "email": "a@x.com",
        "role": "customer",
        "loyaltyCode": customer["user"]["loyaltyCode"],
        "points": 0,
    }


def test_profile_without_token_is_unauthenticated(api):
    r = api.profile()
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_profile_with_non_bearer_header_is_unauthenticated(api, customer):
    r = api.profile(headers={"Authorization": f"Basic {customer['token']}"})
    assert r.status_code == 401


def test_profile_with_garbled_token_is_forbidden(api):
    r = api.profile("not-a-jwt")
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden"}


def test_profile_with_expired_token_is_forbidden(api, settings, customer):
    expired_settings = settings.model_copy(update={"access_token_expire_minutes": -1})
    token = create_access_token(
        expired_settings, user_id=customer["user"]["id"], email="a@x.com", role="customer"
    )
    assert api.profile(token).status_code == 403


def test_profile_with_foreign_signature_is_forbidden(api, customer):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"id": customer["user"]["id"], "email": "a@x.com", "role": "customer", "exp": now + timedelta(hours=1)},
        "someone-elses-secret",
        algorithm="HS256",
    )
    assert api.profile(token).status_code == 403


def test_profile_for_vanished_user_is_not_found(api, settings):
    token = create_access_token(settings, user_id=9999, email="gone@x.com", role="customer")
    r = api.profile(token)
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}
