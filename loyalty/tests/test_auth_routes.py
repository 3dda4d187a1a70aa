from jose import jwt


def test_signup_customer_gets_loyalty_code_and_token(api):
    r = api.signup("a@x.com", role="customer")
    assert r.status_code == 201
    data = r.json()
    assert data["message"] == "User created successfully"
    assert data["token"]
    user = data["user"]
    assert user["email"] == "a@x.com"
    assert user["role"] == "customer"
    assert user["loyaltyCode"]
    assert isinstance(user["id"], int)
    assert "password" not in user and "hashedPassword" not in user


def test_signup_defaults_to_customer(api):
    r = api.signup("norole@x.com")
    assert r.status_code == 201
    assert r.json()["user"]["role"] == "customer"
    assert r.json()["user"]["loyaltyCode"]


def test_signup_merchant_has_no_loyalty_code(api):
    r = api.signup("shop@x.com", role="merchant")
    assert r.status_code == 201
    assert r.json()["user"]["role"] == "merchant"
    assert r.json()["user"]["loyaltyCode"] is None


def test_signup_rejects_unknown_role(api):
    r = api.signup("boss@x.com", role="admin")
    assert r.status_code == 400
    assert "error" in r.json()
    assert api.login("boss@x.com").status_code == 401


def test_signup_duplicate_email_leaves_first_user_intact(api, customer):
    r = api.signup("a@x.com", role="merchant", password="other-password")
    assert r.status_code == 400
    assert r.json() == {"error": "Email already exists"}

    r = api.login("a@x.com")
    assert r.status_code == 200
    assert r.json()["user"]["role"] == "customer"
    assert r.json()["user"]["loyaltyCode"] == customer["user"]["loyaltyCode"]


def test_email_match_is_case_sensitive(api, customer):
    r = api.signup("A@X.com")
    assert r.status_code == 201
    assert r.json()["user"]["id"] != customer["user"]["id"]


def test_signup_missing_fields(api):
    assert api.client.post("/api/auth/signup", json={"email": "a@x.com"}).status_code == 400
    assert api.client.post("/api/auth/signup", json={"password": "pw123456"}).status_code == 400
    r = api.client.post("/api/auth/signup", json={"email": "", "password": ""})
    assert r.status_code == 400
    assert "error" in r.json()


def test_signup_rejects_password_over_bcrypt_limit(api):
    r = api.signup("long@x.com", password="x" * 73)
    assert r.status_code == 400


def test_login_round_trip_token_claims(api, settings):
    created = api.signup("a@x.com", role="customer").json()

    r = api.login("a@x.com")
    assert r.status_code == 200
    data = r.json()
    assert data["user"] == created["user"]

    claims = jwt.decode(data["token"], settings.secret_key, algorithms=[settings.algorithm])
    assert claims["id"] == created["user"]["id"]
    assert claims["email"] == "a@x.com"
    assert claims["role"] == "customer"
    # 24 hour validity window
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_login_failures_are_indistinguishable(api, customer):
    wrong_password = api.login("a@x.com", password="nope-nope")
    unknown_email = api.login("ghost@x.com")
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_login_missing_fields(api):
    r = api.client.post("/api/auth/login", json={"email": "a@x.com"})
    assert r.status_code == 400
