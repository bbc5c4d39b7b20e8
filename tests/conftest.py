import pytest
from fastapi.testclient import TestClient

from emargement_api.config import Settings
from emargement_api.main import create_app

TEST_PASSWORD = 'password123'


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        SECRET_KEY='test-secret',
        DATABASE_URL='sqlite://',
        BCRYPT_ROUNDS=4,
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def register(client):
    def _register(name: str, email: str, role: str, password: str = TEST_PASSWORD) -> dict:
        response = client.post('/auth/signup', json={'name': name, 'email': email, 'password': password, 'role': role})
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@pytest.fixture
def login(client):
    def _login(email: str, password: str = TEST_PASSWORD) -> dict:
        response = client.post('/auth/login', json={'email': email, 'password': password})
        assert response.status_code == 200, response.text
        return {'Authorization': f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def formateur(register, login) -> dict:
    user = register('Fabrice', 'fabrice@example.com', 'formateur')
    return {**user, 'headers': login('fabrice@example.com')}


@pytest.fixture
def other_formateur(register, login) -> dict:
    user = register('Gaelle', 'gaelle@example.com', 'formateur')
    return {**user, 'headers': login('gaelle@example.com')}


@pytest.fixture
def etudiant(register, login) -> dict:
    user = register('Ana', 'ana@example.com', 'etudiant')
    return {**user, 'headers': login('ana@example.com')}


@pytest.fixture
def training_session(client, formateur) -> dict:
    response = client.post(
        '/sessions', json={'title': 'Python avancé', 'date': '2026-11-03'}, headers=formateur['headers'],
    )
    assert response.status_code == 200, response.text
    return response.json()
