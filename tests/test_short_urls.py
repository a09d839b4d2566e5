from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from helpers import register, login, create_link
from main import app
from shorturl_app.config import Settings
from shorturl_app.dependencies import get_short_code_strategy
from shorturl_app.models.short_url import ShortURL
from shorturl_app.models.user import User
from shorturl_app.services.short_code_strategies import Base62ShortCodeStrategy
from shorturl_app.services.short_url_service import ShortURLService


class TestCreateShortURL:
    """Test POST /shortUrls"""

    def test_create_short_url(self, alice: TestClient):
        response = create_link(alice, "https://www.python.org/")
        assert response.status_code == 200

        data = response.json()
        assert data["shortCode"]
        assert data["targetUrl"] == "https://www.python.org/"
        assert data["clicks"] == 0
        assert "id" in data
        assert "createdAt" in data

    def test_created_link_is_in_owner_list(self, alice: TestClient, db_session):
        link_id = create_link(alice).json()["id"]

        user = db_session.query(User).filter(User.username == "alice").one()
        assert [link.id for link in user.short_urls] == [link_id]

    def test_short_code_strategy_can_be_overridden(self, alice: TestClient, db_session):
        app.dependency_overrides[get_short_code_strategy] = (
            lambda: Base62ShortCodeStrategy(salt=0, max_length=7)
        )

        response = create_link(alice)
        assert response.status_code == 200

        link = db_session.query(ShortURL).one()
        assert response.json()["shortCode"] == Base62ShortCodeStrategy(salt=0)._base62_encode(link.id)

    def test_anonymous_create_redirects_to_login(self, client: TestClient, db_session):
        response = create_link(client)

        assert response.status_code == 302
        assert response.headers["location"] == "/login"
        assert db_session.query(ShortURL).count() == 0

    def test_empty_url_is_rejected(self, alice: TestClient):
        response = create_link(alice, "   ")
        assert response.status_code == 422

    def test_codes_are_unique(self, alice: TestClient):
        codes = {create_link(alice).json()["shortCode"] for _ in range(5)}
        assert len(codes) == 5


class TestRedirect:
    """Test GET /{short_code} and GET /decode/{short_code}"""

    def test_redirect_counts_clicks(self, alice: TestClient):
        short_code = create_link(alice, "https://www.github.com/").json()["shortCode"]

        for _ in range(3):
            response = alice.get(f"/{short_code}", follow_redirects=False)
            assert response.status_code == 302
            assert response.headers["location"] == "https://www.github.com/"

        decoded = alice.get(f"/decode/{short_code}").json()
        assert decoded["clicks"] == 3

    def test_redirect_is_public(self, alice: TestClient):
        short_code = create_link(alice).json()["shortCode"]
        alice.get("/logout", follow_redirects=False)

        response = alice.get(f"/{short_code}", follow_redirects=False)
        assert response.status_code == 302

    def test_unknown_code_is_404_and_changes_nothing(self, alice: TestClient, db_session):
        create_link(alice)

        response = alice.get("/nonexistent", follow_redirects=False)
        assert response.status_code == 404
        assert db_session.query(ShortURL).filter(ShortURL.clicks > 0).count() == 0

    def test_decode(self, alice: TestClient):
        short_code = create_link(alice, "https://www.stackoverflow.com/").json()["shortCode"]

        response = alice.get(f"/decode/{short_code}")
        assert response.status_code == 200
        data = response.json()
        assert data["full"] == "https://www.stackoverflow.com/"
        assert data["short"] == short_code
        assert data["clicks"] == 0
        assert data["date"] is not None

    def test_decode_does_not_count_clicks(self, alice: TestClient):
        short_code = create_link(alice).json()["shortCode"]

        alice.get(f"/decode/{short_code}")
        alice.get(f"/decode/{short_code}")

        assert alice.get(f"/decode/{short_code}").json()["clicks"] == 0

    def test_decode_unknown_code(self, client: TestClient):
        response = client.get("/decode/nonexistent")
        assert response.status_code == 404


class TestDeleteShortURL:
    """Test DELETE /shortUrls/{id}/delete"""

    def test_owner_can_delete(self, alice: TestClient, db_session):
        created = create_link(alice).json()

        response = alice.delete(f"/shortUrls/{created['id']}/delete", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/"

        assert db_session.query(ShortURL).count() == 0
        user = db_session.query(User).filter(User.username == "alice").one()
        assert user.short_urls == []

        response = alice.get(f"/{created['shortCode']}", follow_redirects=False)
        assert response.status_code == 404

    def test_non_owner_is_forbidden(self, alice: TestClient, other_client: TestClient, db_session):
        # alice's cookie jar is separate from bob's
        created = create_link(alice).json()

        response = other_client.delete(
            f"/shortUrls/{created['id']}/delete", follow_redirects=False
        )
        assert response.status_code == 403
        assert db_session.query(ShortURL).filter(ShortURL.id == created["id"]).count() == 1

    def test_missing_link_is_forbidden(self, alice: TestClient):
        response = alice.delete("/shortUrls/9999/delete", follow_redirects=False)
        assert response.status_code == 403

    def test_anonymous_delete_redirects_to_login(self, alice: TestClient):
        created = create_link(alice).json()
        alice.get("/logout", follow_redirects=False)

        response = alice.delete(f"/shortUrls/{created['id']}/delete", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_vanished_link_is_404(self, alice: TestClient, monkeypatch):
        created = create_link(alice).json()
        monkeypatch.setattr(ShortURLService, "get_owned", lambda self, link_id, owner_id: None)

        response = alice.delete(f"/shortUrls/{created['id']}/delete", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found"}


class TestHomePage:
    """Test GET /"""

    def test_lists_every_link(self, alice: TestClient, other_client: TestClient):
        create_link(alice, "https://alice.example.com/")
        create_link(other_client, "https://bob.example.com/")

        response = alice.get("/")
        assert response.status_code == 200
        assert "https://alice.example.com/" in response.text
        assert "https://bob.example.com/" in response.text

    def test_only_owner_sees_delete_button(self, alice: TestClient, other_client: TestClient):
        created = create_link(alice).json()
        delete_path = f"/shortUrls/{created['id']}/delete"

        assert delete_path in alice.get("/").text
        assert delete_path not in other_client.get("/").text

    def test_anonymous_home(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert "No short URLs yet." in response.text

    def test_database_errors_become_500(self, client: TestClient, monkeypatch):
        def broken_list_all(self):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(ShortURLService, "list_all", broken_list_all)

        response = client.get("/")
        assert response.status_code == 500
        assert response.text == "Internal Server Error"

    def test_unexpected_errors_become_plain_500(self, client: TestClient, session_store, monkeypatch):
        def broken_list_all(self):
            raise RuntimeError("secret internals")

        monkeypatch.setattr(ShortURLService, "list_all", broken_list_all)

        with TestClient(app, raise_server_exceptions=False) as raw_client:
            app.state.session_store = session_store
            response = raw_client.get("/")

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        assert "secret internals" not in response.text
        assert "Traceback" not in response.text

    def test_debug_is_off_by_default(self):
        assert Settings.model_fields["debug"].default is False


def test_full_scenario(client: TestClient):
    """register -> login -> create -> follow -> decode"""
    assert register(client, "alice", "pw1").status_code == 302
    assert login(client, "alice", "pw1").status_code == 302

    response = create_link(client, "https://example.com")
    short_code = response.json()["shortCode"]

    response = client.get(f"/{short_code}", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "https://example.com"

    assert client.get(f"/decode/{short_code}").json()["clicks"] == 1


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"
