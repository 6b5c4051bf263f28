from fastapi.testclient import TestClient

PAY_BILLS = {
    "title": "Pay bills",
    "createdDate": "2024-01-01",
    "completedDate": "2024-01-01",
    "status": "todo",
}


def register(client: TestClient, name: str, email: str, password: str = "secret1"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def login(client: TestClient, email: str, password: str = "secret1"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
