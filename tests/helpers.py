"""Request helpers shared by the route tests."""

from fastapi.testclient import TestClient


def register(client: TestClient, username: str = "alice", password: str = "pw1"):
    return client.post(
        "/register",
        data={"username": username, "password": password},
        follow_redirects=False
    )


def login(client: TestClient, username: str = "alice", password: str = "pw1"):
    return client.post(
        "/login",
        data={"username": username, "password": password},
        follow_redirects=False
    )


def create_link(client: TestClient, full_url: str = "https://example.com"):
    return client.post("/shortUrls", data={"fullUrl": full_url}, follow_redirects=False)
