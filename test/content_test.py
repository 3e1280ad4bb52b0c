import pytest


@pytest.mark.parametrize(
    "path, body, changes",
    [
        ("/api/stories", {"name": "Amina", "role": "Student", "image": "a.jpg", "quote": "I can read now."}, {"featured": True}),
        ("/api/team", {"name": "Lucia", "role": "Director", "image": "l.jpg"}, {"role": "Founder"}),
        ("/api/programs", {"title": "Scholarships", "description": "Fees and uniforms", "image": "p.jpg", "features": ["Tuition", "Books"]}, {"features": ["Tuition"]}),
        ("/api/journey", {"year": 2015, "title": "Founded", "description": "First classroom"}, {"title": "Founded in Lima"}),
    ],
)
def test_create_list_update_delete(client, path, body, changes):
    created = client.post(path, json=body)
    assert created.status_code == 201
    item = created.json()
    for key, value in body.items():
        assert item[key] == value

    assert [row["id"] for row in client.get(path).json()] == [item["id"]]

    updated = client.put(f"{path}/{item['id']}", json=dict(body, **changes))
    assert updated.status_code == 200
    for key, value in changes.items():
        assert updated.json()[key] == value

    assert client.delete(f"{path}/{item['id']}").json() == {"message": "success"}
    assert client.get(path).json() == []


@pytest.mark.parametrize("path", ["/api/stories/99", "/api/team/99", "/api/programs/99", "/api/journey/99"])
def test_update_missing_row_is_404(client, path):
    body = {"name": "n", "title": "t", "year": 2000}
    assert client.put(path, json=body).status_code == 404


def test_story_featured_defaults_false(client):
    assert client.post("/api/stories", json={"name": "Amina"}).json()["featured"] is False


def test_journey_listed_by_year(client):
    for year in (2019, 999, "2012", 2016):
        client.post("/api/journey", json={"year": year, "title": f"Milestone {year}"})
    assert [e["year"] for e in client.get("/api/journey").json()] == [999, 2012, 2016, 2019]


def test_journey_year_round_trips_as_number(client):
    created = client.post("/api/journey", json={"year": 2016, "title": "New school"})
    assert created.status_code == 201
    assert created.json()["year"] == 2016
    assert client.get("/api/journey").json() == [created.json()]


def test_program_features_accept_any_json(client):
    no_features = client.post("/api/programs", json={"title": "Mentoring", "features": None})
    assert no_features.status_code == 201
    assert no_features.json()["features"] is None

    grouped = {"core": ["Tutoring"], "extra": {"weekly": True}}
    created = client.post("/api/programs", json={"title": "Clubs", "features": grouped})
    assert created.status_code == 201
    assert created.json()["features"] == grouped


def test_gallery(client):
    item = client.post("/api/gallery", json={"url": "https://img.example/g.jpg", "caption": "Class of 2024"}).json()
    assert client.get("/api/gallery").json() == [item]
    assert client.delete(f"/api/gallery/{item['id']}").json() == {"message": "success"}
    assert client.get("/api/gallery").json() == []


def test_missing_setting_is_null(client):
    resp = client.get("/api/settings/never-written")
    assert resp.status_code == 200
    assert resp.json() is None


def test_setting_upsert_overwrites(client, db):
    from sqlalchemy import select

    from storefront.models import settings

    first = client.post("/api/settings/hero", json={"value": {"title": "Educate a girl", "cta": ["Donate"]}})
    assert first.status_code == 200
    assert first.json() == {"key": "hero", "value": {"title": "Educate a girl", "cta": ["Donate"]}}

    client.post("/api/settings/hero", json={"value": "plain text"})
    assert client.get("/api/settings/hero").json() == "plain text"
    assert len(db.query_many(select(settings).where(settings.c.key == "hero"))) == 1


def test_messages_flow(client):
    first = client.post("/api/messages", json={"name": "Eva", "email": "eva@example.com", "message": "Hello"}).json()
    second = client.post("/api/messages", json={"name": "Tom", "email": "tom@example.com", "message": "Hi"}).json()
    assert first["read"] is False
    assert first["date"]

    assert [m["id"] for m in client.get("/api/messages").json()] == [second["id"], first["id"]]

    marked = client.put(f"/api/messages/{first['id']}/read")
    assert marked.status_code == 200
    assert marked.json()["read"] is True

    assert client.delete(f"/api/messages/{second['id']}").json() == {"message": "success"}
    assert [m["id"] for m in client.get("/api/messages").json()] == [first["id"]]


def test_mark_missing_message_read_is_404(client):
    assert client.put("/api/messages/42/read").status_code == 404


def test_health_reports_database(client):
    assert client.get("/api/health").json() == {"status": "ok", "database": True}
