"""Tests for the user endpoints."""

from conftest import bearer_headers


class TestListUsers:
    def test_requires_token(self, client):
        response = client.get('/api/users')
        assert response.status_code == 401
        assert response.get_json()['kind'] == 'MissingTokenError'

    def test_lists_public_fields_only(self, client, auth_headers):
        response = client.get('/api/users', headers=auth_headers)
        assert response.status_code == 200
        data = response.get_json()
        assert data['count'] == 1
        assert data['users'] == [{'id': 1, 'username': 'admin', 'email': 'admin@example.com'}]
        assert 'password_hash' not in response.get_data(as_text=True)


class TestCurrentUser:
    def test_profile(self, client, auth_headers):
        response = client.get('/api/users/me', headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json()['user']['username'] == 'admin'

    def test_profile_of_deleted_user(self, app, client, admin_token):
        app.extensions['user_store'].remove(1)
        response = client.get('/api/users/me', headers=bearer_headers(admin_token))
        assert response.status_code == 404
        assert response.get_json()['message'] == 'User associated with token no longer exists'

    def test_bound_token_works_for_reads(self, client, admin_token):
        from conftest import sign_content
        signed = sign_content(client, admin_token, {'x': 1})
        assert client.get('/api/users/me', headers=bearer_headers(signed)).status_code == 200
