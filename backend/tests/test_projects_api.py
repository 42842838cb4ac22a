import uuid

import pytest

from app.core.constants import MAX_PAGE_SIZE
from app.models import Project
from app.schemas.project import ProjectUpdate


CARD_FIELDS = {
    "id", "name", "description", "rating", "created_at", "updated_at",
    "author", "categories", "thumb",
}


@pytest.fixture
def author(make_user):
    return make_user(name="Alice")


@pytest.fixture
def motion(make_category, author):
    return make_category(author, "Motion", "motion")


def test_create_project(client, db, author, motion, auth_headers):
    response = client.post(
        "/api/v1/projects",
        json={"name": "Brand film", "description": "spot", "category_id_list": [str(motion.id)]},
        headers=auth_headers(author),
    )

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "name"}
    assert body["name"] == "Brand film"
    assert db.query(Project).one().author_id == author.id


def test_create_project_requires_token(client, motion):
    response = client.post(
        "/api/v1/projects",
        json={"name": "Anonymous", "category_id_list": [str(motion.id)]},
    )

    assert response.status_code in (401, 403)


@pytest.mark.parametrize("category_ids", [[], [str(uuid.uuid4())]])
def test_create_project_bad_categories(client, db, author, auth_headers, category_ids):
    response = client.post(
        "/api/v1/projects",
        json={"name": "Lost", "category_id_list": category_ids},
        headers=auth_headers(author),
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Not found category"
    assert db.query(Project).count() == 0


def test_list_projects(client, author, motion, make_project):
    for i in range(12):
        make_project(author, [motion], name=f"Project {i:02d}")

    response = client.get("/api/v1/projects", params={"page": 0, "page_size": 10})

    assert response.status_code == 200
    cards = response.json()
    assert len(cards) == 10
    for card in cards:
        assert set(card) == CARD_FIELDS
        assert set(card["author"]) == {"id", "name", "avatar"}
        assert card["categories"] == [{"id": str(motion.id), "name": "Motion", "link": "motion"}]

    rest = client.get("/api/v1/projects", params={"page": 1, "page_size": 10}).json()
    assert len(rest) == 2
    assert not {c["id"] for c in cards} & {c["id"] for c in rest}


def test_list_projects_sorted(client, services, author, motion, make_project):
    for name, rating in [("Low", 1), ("High", 9), ("Mid", 5)]:
        project = make_project(author, [motion], name=name)
        services.project.update_project(project.id, ProjectUpdate(rating=rating))

    by_rating = client.get("/api/v1/projects", params={"sort": "rating", "desc": "true"}).json()
    by_name = client.get("/api/v1/projects", params={"sort": "name", "desc": "false"}).json()

    assert [c["name"] for c in by_rating] == ["High", "Mid", "Low"]
    assert [c["name"] for c in by_name] == ["High", "Low", "Mid"]


@pytest.mark.parametrize("params", [
    {"page": -1},
    {"page_size": 0},
    {"page_size": MAX_PAGE_SIZE + 1},
    {"sort": "author"},
])
def test_list_projects_invalid_query(client, params):
    assert client.get("/api/v1/projects", params=params).status_code == 422


def test_name_suggestions(client, author, motion, make_project):
    for name in ["Reel one", "Reel two", "Spot"]:
        make_project(author, [motion], name=name)

    response = client.get("/api/v1/projects/names", params={"q": "REEL"})

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Reel one", "Reel two"]
    assert set(response.json()[0]) == {"id", "name"}


def test_search(client, author, motion, make_project):
    for name in ["Reel B", "Reel A", "Spot"]:
        make_project(author, [motion], name=name)

    response = client.get("/api/v1/projects/search", params={"name": "reel"})

    assert [p["name"] for p in response.json()] == ["Reel A", "Reel B"]


def test_list_by_user_and_category(client, make_user, make_category, author, motion, make_project):
    other = make_user(name="Bob")
    branding = make_category(other, "Branding", "branding")
    make_project(author, [motion], name="Alice's")
    make_project(other, [branding], name="Bob's")

    by_user = client.get(f"/api/v1/projects/user/{other.id}").json()
    by_category = client.get("/api/v1/projects/category/motion").json()

    assert [p["name"] for p in by_user] == ["Bob's"]
    assert [p["name"] for p in by_category] == ["Alice's"]


def test_detail(client, author, motion, make_project):
    project = make_project(author, [motion], name="Reel")

    response = client.get(f"/api/v1/projects/{project.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Reel"
    assert body["video"] is None
    assert body["images"] == []
    assert client.get(f"/api/v1/projects/{uuid.uuid4()}").status_code == 404


def test_update_project(client, make_category, author, motion, make_project, auth_headers):
    branding = make_category(author, "Branding", "branding")
    project = make_project(author, [motion], name="Reel")

    response = client.put(
        f"/api/v1/projects/{project.id}",
        json={"name": "Showreel", "category_id_list": [str(branding.id)]},
        headers=auth_headers(author),
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Project Showreel was updated"}
    detail = client.get(f"/api/v1/projects/{project.id}").json()
    assert [c["link"] for c in detail["categories"]] == ["branding"]


def test_only_author_can_modify(client, make_user, author, motion, make_project, auth_headers):
    project = make_project(author, [motion], name="Reel")
    other = make_user(name="Bob")

    update = client.put(
        f"/api/v1/projects/{project.id}", json={"name": "Mine now"}, headers=auth_headers(other)
    )
    delete = client.delete(f"/api/v1/projects/{project.id}", headers=auth_headers(other))

    assert update.status_code == 403
    assert delete.status_code == 403


def test_delete_project(client, author, motion, make_project, auth_headers):
    project = make_project(author, [motion], name="Reel")

    response = client.delete(f"/api/v1/projects/{project.id}", headers=auth_headers(author))

    assert response.status_code == 200
    assert response.json() == {"message": "Project Reel has deleted"}
    assert client.delete(
        f"/api/v1/projects/{project.id}", headers=auth_headers(author)
    ).status_code == 404
