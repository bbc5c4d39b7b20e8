import pytest
from pydantic import ValidationError as SettingsError

from emargement_api.config import Settings
from emargement_api.models.users import User
from emargement_api.utils.tokenJWT import TokenService


def test_signup_returns_user_summary(client) -> None:
    response = client.post(
        '/auth/signup', json={'name': 'Ana', 'email': 'a@x.com', 'password': '12345678', 'role': 'etudiant'},
    )

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {'id', 'name', 'email', 'role'}
    assert body['name'] == 'Ana'
    assert body['email'] == 'a@x.com'
    assert body['role'] == 'etudiant'


def test_signup_with_taken_email_is_refused(client) -> None:
    payload = {'name': 'Ana', 'email': 'a@x.com', 'password': '12345678', 'role': 'etudiant'}
    assert client.post('/auth/signup', json=payload).status_code == 200

    response = client.post('/auth/signup', json={**payload, 'email': 'A@X.com'})

    assert response.status_code == 401
    assert response.json()['error']['code'] == 'conflict'


def test_signup_with_unknown_role_writes_nothing(client, app) -> None:
    response = client.post(
        '/auth/signup', json={'name': 'Ana', 'email': 'a@x.com', 'password': '12345678', 'role': 'admin'},
    )

    assert response.status_code == 400
    assert response.json()['error']['details'][0]['field'] == 'role'

    db = app.state.session_factory()
    try:
        assert db.query(User).count() == 0
    finally:
        db.close()


def test_signup_validation_errors_use_envelope(client) -> None:
    response = client.post('/auth/signup', json={'name': 'A', 'email': 'nope', 'password': '123', 'role': 'etudiant'})

    assert response.status_code == 400
    error = response.json()['error']
    assert error['code'] == 'validation_error'
    assert {detail['field'] for detail in error['details']} == {'name', 'email', 'password'}


def test_malformed_json_body_is_rejected(client) -> None:
    response = client.post('/auth/login', content=b'{not json', headers={'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert response.json()['error']['details'][0]['type'] == 'json_invalid'


def test_password_is_stored_hashed(client, app, register) -> None:
    register('Ana', 'a@x.com', 'etudiant', password='12345678')

    db = app.state.session_factory()
    try:
        stored = db.query(User).filter(User.email == 'a@x.com').one()
    finally:
        db.close()
    assert stored.password_hash != '12345678'
    assert app.state.password_hasher.verify('12345678', stored.password_hash)


def test_login_issues_token_for_the_user(client, app, register) -> None:
    user = register('Ana', 'a@x.com', 'etudiant', password='12345678')

    response = client.post('/auth/login', json={'email': 'a@x.com', 'password': '12345678'})

    assert response.status_code == 200
    identity = app.state.token_service.verify(response.json()['token'])
    assert identity.id == user['id']
    assert identity.role == 'etudiant'


def test_login_with_wrong_password_issues_no_token(client, register) -> None:
    register('Ana', 'a@x.com', 'etudiant', password='12345678')

    response = client.post('/auth/login', json={'email': 'a@x.com', 'password': 'wrong-password'})

    assert response.status_code == 401
    assert 'token' not in response.json()
    assert response.json()['error']['code'] == 'unauthenticated'


def test_login_with_unknown_email_is_refused(client) -> None:
    response = client.post('/auth/login', json={'email': 'ghost@x.com', 'password': '12345678'})

    assert response.status_code == 401


def test_protected_requires_token(client) -> None:
    response = client.get('/protected')

    assert response.status_code == 401
    assert response.headers['www-authenticate'] == 'Bearer'
    assert response.json()['error']['code'] == 'unauthenticated'


@pytest.mark.parametrize('header', ['Bearer garbage', 'Basic YWxhZGRpbjpvcGVuc2VzYW1l', 'Bearer'])
def test_protected_rejects_bad_credentials(client, header: str) -> None:
    response = client.get('/protected', headers={'Authorization': header})

    assert response.status_code == 401


def test_protected_accepts_valid_token(client, etudiant) -> None:
    response = client.get('/protected', headers=etudiant['headers'])

    assert response.status_code == 200
    assert response.content == b''


def test_token_from_another_secret_is_refused(client, register) -> None:
    user = register('Ana', 'a@x.com', 'etudiant')
    forged = TokenService('not-the-secret').issue({'id': user['id'], 'role': 'formateur'})

    response = client.get('/protected', headers={'Authorization': f'Bearer {forged}'})

    assert response.status_code == 401


def test_settings_require_secret_key(monkeypatch) -> None:
    monkeypatch.delenv('SECRET_KEY', raising=False)

    with pytest.raises(SettingsError):
        Settings(_env_file=None)


def test_unknown_route_uses_error_envelope(client) -> None:
    response = client.get('/nope')

    assert response.status_code == 404
    assert response.json()['error']['code'] == 'not_found'


def test_long_password_signs_up_and_logs_in(client, app) -> None:
    password = 'p' * 80
    signup = client.post('/auth/signup', json={'name': 'Ana', 'email': 'a@x.com', 'password': password, 'role': 'etudiant'})

    assert signup.status_code == 200

    response = client.post('/auth/login', json={'email': 'a@x.com', 'password': password})
    assert response.status_code == 200
    assert app.state.token_service.verify(response.json()['token']).id == signup.json()['id']

    truncated = client.post('/auth/login', json={'email': 'a@x.com', 'password': 'p' * 72})
    assert truncated.status_code == 401


def test_concurrent_signup_with_same_email_is_a_conflict(client, app, register, monkeypatch: pytest.MonkeyPatch) -> None:
    register('Ana', 'a@x.com', 'etudiant')
    # The other request committed between the email check and the insert
    monkeypatch.setattr('emargement_api.routes.auth.find_user_by_email', lambda db, email: None)

    response = client.post(
        '/auth/signup', json={'name': 'Ana bis', 'email': 'a@x.com', 'password': '12345678', 'role': 'etudiant'},
    )

    assert response.status_code == 401
    assert response.json()['error']['code'] == 'conflict'

    db = app.state.session_factory()
    try:
        assert db.query(User).count() == 1
    finally:
        db.close()
    # Rolled back cleanly, the store keeps accepting writes
    assert register('Bruno', 'b@x.com', 'etudiant')['email'] == 'b@x.com'
