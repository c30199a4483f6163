from visitlogger.models import TrackingScript

from tests.conftest import FailingStore


def test_create_script_returns_url_and_ids(client):
    response = client.post("/script", json={"userId": "owner-1", "scriptName": "Blog"})

    assert response.status_code == 200
    data = response.json()
    assert data["userId"] == "owner-1"
    assert data["scriptName"] == "Blog"
    assert data["scriptId"]
    assert data["scriptUrl"] == (
        f"https://visits.example.com/track.js?scriptId={data['scriptId']}&userId=owner-1"
    )
    assert "script" not in data


def test_create_script_persists_record(client, store):
    data = client.post("/script", json={"userId": "owner-1", "scriptName": "Blog"}).json()

    with store.session() as db:
        record = db.query(TrackingScript).filter(TrackingScript.script_id == data["scriptId"]).one()
        assert record.document_id == data["scriptId"]
        assert record.user_id == "owner-1"
        assert record.script_name == "Blog"
        assert record.script_url == data["scriptUrl"]


def test_same_name_twice_yields_distinct_script_ids(client):
    payload = {"userId": "owner-1", "scriptName": "Blog"}

    first = client.post("/script", json=payload).json()
    second = client.post("/script", json=payload).json()

    assert first["scriptId"] != second["scriptId"]


def test_create_inline_script(client):
    response = client.post("/script", json={"userId": "owner-1", "scriptName": "Blog", "inline": True})

    assert response.status_code == 200
    data = response.json()
    assert "scriptUrl" not in data
    assert data["script"].startswith("<script>")
    assert f'const scriptId = "{data["scriptId"]}";' in data["script"]


def test_create_script_requires_fields(client):
    for payload in ({"userId": "owner-1"}, {"scriptName": "Blog"}, {"userId": "", "scriptName": "Blog"}):
        response = client.post("/script", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "userId and scriptName are required"}


def test_create_script_storage_failure(make_client):
    client = make_client(store_override=FailingStore())

    response = client.post("/script", json={"userId": "owner-1", "scriptName": "Blog"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
