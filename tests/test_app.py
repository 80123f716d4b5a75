import pytest

from app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_encrypt_then_decrypt(client):
    response = client.post("/api/encrypt", json={"payload": "Hello", "bases": [13, 7, 40]})
    body = response.get_json()

    assert response.status_code == 200
    assert body["success"]
    assert body["steps"] == 3

    response = client.post("/api/decrypt", json={"payload": body["result"], "bases": "13 7 40"})
    assert response.get_json()["result"] == "Hello"


def test_empty_bases_is_identity(client):
    response = client.post("/api/encrypt", json={"payload": "Hello"})
    assert response.get_json() == {"success": True, "result": "Hello", "steps": 0}


def test_invalid_base(client):
    response = client.post("/api/encrypt", json={"payload": "Hello", "bases": [13, 1]})

    assert response.status_code == 400
    assert not response.get_json()["success"]
    assert "Base 1" in response.get_json()["error"]


def test_invalid_symbol(client):
    response = client.post("/api/decrypt", json={"payload": "z", "bases": [10]})
    assert response.status_code == 400


def test_bad_request_body(client):
    response = client.post("/api/encrypt", data="not json", content_type="text/plain")
    assert response.status_code == 400

    response = client.post("/api/encrypt", json={"payload": "Hi", "bases": 13})
    assert response.status_code == 400


def test_custom_charset_convert(client):
    response = client.post("/api/convert", json={
        "number": "FF", "base_from": 16, "base_to": 2, "charset": "0123456789ABCDEF",
    })
    assert response.get_json() == {"success": True, "result": "11111111"}


def test_convert_requires_bases(client):
    response = client.post("/api/convert", json={"number": "FF"})
    assert response.status_code == 400


def test_duplicate_charset_symbols(client):
    response = client.post("/api/convert", json={
        "number": "1", "base_from": 2, "base_to": 2, "charset": "0011",
    })
    assert response.status_code == 400


def test_charsets(client):
    charsets = client.get("/api/charsets").get_json()["charsets"]
    assert charsets == {"default": 95, "printable": 95}


@pytest.mark.parametrize("number", [None, True, 255])
def test_convert_rejects_non_string_number(client, number):
    response = client.post("/api/convert", json={
        "number": number, "base_from": 95, "base_to": 10,
    })

    assert response.status_code == 400
    assert response.get_json()["error"] == "number must be a string"


@pytest.mark.parametrize("charset", [["a", "b"], 16, {"name": "default"}])
def test_non_string_charset_is_rejected(client, charset):
    for path, body in (
        ("/api/encrypt", {"payload": "Hello", "bases": [13], "charset": charset}),
        ("/api/convert", {"number": "1", "base_from": 2, "base_to": 2, "charset": charset}),
    ):
        response = client.post(path, json=body)
        assert response.status_code == 400
        assert not response.get_json()["success"]


def test_overlong_base_token(client):
    response = client.post("/api/encrypt", json={
        "payload": "Hello", "bases": "13 " + "9" * 5000,
    })
    assert response.status_code == 400


def test_oversized_request_is_refused(client):
    response = client.post("/api/encrypt", json={
        "payload": "1" * (app.config["MAX_CONTENT_LENGTH"] + 1), "bases": [13],
    })
    assert response.status_code == 413
