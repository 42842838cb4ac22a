import os
import uuid

import pytest
from sqlalchemy import func, select

from app.core.exceptions import BadRequestError, NotFoundError
from app.models import Image, Project, Video, project_categories
from app.schemas.media import ImageCreate, VideoCreate
from app.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectListItem,
    ProjectSortField,
    ProjectUpdate,
)
from app.services.project_service import like_pattern


CARD_FIELDS = {
    "id", "name", "description", "rating", "created_at", "updated_at",
    "author", "categories", "thumb",
}


@pytest.fixture
def author(make_user):
    return make_user(name="Alice", avatar="avatars/alice.png")


@pytest.fixture
def motion(make_category, author):
    return make_category(author, "Motion", "motion")


@pytest.fixture
def branding(make_category, author):
    return make_category(author, "Branding", "branding")


def set_rating(services, project, rating):
    services.project.update_project(project.id, ProjectUpdate(rating=rating))


# ============================================================================
# create_project
# ============================================================================

def test_create_project_trims_and_links_categories(services, db, author, motion, branding):
    created = services.project.create_project(
        ProjectCreate(
            name="  Brand film  ",
            description="  30s spot ",
            category_id_list=[motion.id, branding.id],
        ),
        author.id,
    )

    assert created["name"] == "Brand film"
    project = db.query(Project).filter(Project.id == created["id"]).one()
    assert project.description == "30s spot"
    assert project.author_id == author.id
    assert project.rating == 0
    assert {c.link for c in project.categories} == {"motion", "branding"}


def test_create_project_unknown_author(services, db, motion):
    with pytest.raises(BadRequestError) as exc_info:
        services.project.create_project(
            ProjectCreate(name="Orphan", category_id_list=[motion.id]), uuid.uuid4()
        )

    assert exc_info.value.message == "Not found author"
    assert exc_info.value.status_code == 400
    assert db.query(Project).count() == 0


def test_create_project_requires_categories(services, db, author):
    with pytest.raises(NotFoundError):
        services.project.create_project(ProjectCreate(name="No category"), author.id)

    assert db.query(Project).count() == 0


def test_create_project_one_unknown_category_creates_nothing(services, db, author, motion):
    missing = uuid.uuid4()

    with pytest.raises(NotFoundError) as exc_info:
        services.project.create_project(
            ProjectCreate(name="Partial", category_id_list=[motion.id, missing]), author.id
        )

    assert exc_info.value.details["category_ids"] == [str(missing)]
    assert db.query(Project).count() == 0


def test_create_project_blank_name(services, db, author, motion):
    with pytest.raises(BadRequestError):
        services.project.create_project(
            ProjectCreate(name="   ", category_id_list=[motion.id]), author.id
        )

    assert db.query(Project).count() == 0


# ============================================================================
# Listings
# ============================================================================

def test_list_returns_card_projection(services, author, motion, make_project):
    make_project(author, [motion], name="Reel")

    items = services.project.get_list_project(0, 10, ProjectSortField.CREATED_AT, True)

    assert len(items) == 1
    card = ProjectListItem.model_validate(items[0]).model_dump()
    assert set(card) == CARD_FIELDS
    assert card["author"] == {"id": author.id, "name": "Alice", "avatar": "avatars/alice.png"}
    assert card["categories"] == [{"id": motion.id, "name": "Motion", "link": "motion"}]
    assert card["thumb"] is None


def test_list_pagination(services, author, motion, make_project):
    for i in range(12):
        set_rating(services, make_project(author, [motion], name=f"Project {i}"), i)

    first = services.project.get_list_project(0, 10, ProjectSortField.RATING, True)
    second = services.project.get_list_project(1, 10, ProjectSortField.RATING, True)

    assert [p.rating for p in first] == list(range(11, 1, -1))
    assert [p.rating for p in second] == [1, 0]
    assert services.project.get_list_project(2, 10, ProjectSortField.RATING, True) == []


def test_list_sort_by_name_ascending(services, author, motion, make_project):
    for name in ["Bravo", "Alpha", "Charlie"]:
        make_project(author, [motion], name=name)

    items = services.project.get_list_project(0, 10, ProjectSortField.NAME, False)

    assert [p.name for p in items] == ["Alpha", "Bravo", "Charlie"]


def test_list_by_user(services, make_user, author, motion, make_project):
    other = make_user(name="Bob")
    mine = make_project(author, [motion], name="Mine")
    make_project(other, [motion], name="Theirs")

    items = services.project.get_list_project_by_user_id(
        author.id, 0, 10, ProjectSortField.NAME, False
    )

    assert [p.id for p in items] == [mine.id]


def test_list_by_category_keeps_all_categories(services, author, motion, branding, make_project):
    both = make_project(author, [motion, branding], name="Both")
    make_project(author, [branding], name="Branding only")

    items = services.project.get_list_project_by_category(
        "motion", 0, 10, ProjectSortField.NAME, False
    )

    assert [p.id for p in items] == [both.id]
    assert {c.link for c in items[0].categories} == {"motion", "branding"}


def test_list_by_unknown_category_is_empty(services, author, motion, make_project):
    make_project(author, [motion])

    assert services.project.get_list_project_by_category(
        "nope", 0, 10, ProjectSortField.NAME, False
    ) == []


# ============================================================================
# Search
# ============================================================================

def test_name_suggestions_limit_and_order(services, author, motion, make_project):
    for i in [7, 3, 1, 6, 2, 5, 4]:
        make_project(author, [motion], name=f"Alpha {i}")
    make_project(author, [motion], name="Beta")

    suggestions = services.project.get_name_project("ALPHA")

    assert [p.name for p in suggestions] == [f"Alpha {i}" for i in range(1, 6)]


def test_name_suggestions_treat_wildcards_literally(services, author, motion, make_project):
    make_project(author, [motion], name="100% Pure")
    make_project(author, [motion], name="1000 Cuts")
    make_project(author, [motion], name="a_b")
    make_project(author, [motion], name="axb")

    assert [p.name for p in services.project.get_name_project("100%")] == ["100% Pure"]
    assert [p.name for p in services.project.get_name_project("a_b")] == ["a_b"]


def test_like_pattern_escapes():
    assert like_pattern("50%_off\\") == "%50\\%\\_off\\\\%"


def test_search_by_name(services, author, motion, make_project):
    make_project(author, [motion], name="Reel B")
    make_project(author, [motion], name="Reel A")
    make_project(author, [motion], name="Other")

    results = services.project.get_project_by_name("reel")

    assert [p.name for p in results] == ["Reel A", "Reel B"]


# ============================================================================
# Detail
# ============================================================================

def test_detail_loads_media(services, author, motion, make_project, media_file):
    project = make_project(author, [motion], name="Full")
    video = services.video.create_video(
        VideoCreate(file_path=media_file("full.mp4"), project_id=project.id)
    )
    thumb = services.image.create_image(
        ImageCreate(path=media_file("thumb.png"), project_id=project.id, is_thumb=True)
    )
    gallery = [
        services.image.create_image(ImageCreate(path=media_file(f"g{i}.jpg"), project_id=project.id))
        for i in range(2)
    ]

    detail = ProjectDetail.model_validate(services.project.get_detail_project(project.id))

    assert detail.video.id == video.id
    assert detail.thumb.id == thumb.id
    assert {image.id for image in detail.images} == {image.id for image in gallery}
    assert detail.author.name == "Alice"
    assert [c.link for c in detail.categories] == ["motion"]


def test_detail_not_found(services):
    with pytest.raises(NotFoundError):
        services.project.get_detail_project(uuid.uuid4())


# ============================================================================
# Delete
# ============================================================================

def test_delete_removes_rows_and_files(services, db, author, motion, make_project, media_file):
    project = make_project(author, [motion], name="Doomed")
    video_path = media_file("doomed.mp4")
    thumb_path = media_file("doomed.png")
    gallery_path = media_file("doomed-1.jpg")
    services.video.create_video(VideoCreate(file_path=video_path, project_id=project.id))
    services.image.create_image(ImageCreate(path=thumb_path, project_id=project.id, is_thumb=True))
    services.image.create_image(ImageCreate(path=gallery_path, project_id=project.id))

    message = services.project.delete_project(project.id)

    assert message == "Project Doomed has deleted"
    for path in (video_path, thumb_path, gallery_path):
        assert not os.path.exists(path)
    assert db.query(Project).count() == 0
    assert db.query(Video).count() == 0
    assert db.query(Image).count() == 0
    assert db.execute(select(func.count()).select_from(project_categories)).scalar() == 0
    # Categories outlive their projects
    assert services.category.get_one_by_id(motion.id) is not None


def test_delete_skips_missing_video_file(services, db, author, motion, make_project, media_file):
    project = make_project(author, [motion], name="Gone")
    video_path = media_file("gone.mp4")
    services.video.create_video(VideoCreate(file_path=video_path, project_id=project.id))
    os.remove(video_path)

    assert services.project.delete_project(project.id) == "Project Gone has deleted"
    assert db.query(Video).count() == 0


def test_delete_unknown_project(services):
    with pytest.raises(NotFoundError):
        services.project.delete_project(uuid.uuid4())


def test_delete_projects_by_author(services, db, make_user, author, motion, make_project):
    other = make_user(name="Bob")
    make_project(author, [motion], name="One")
    make_project(author, [motion], name="Two")
    make_project(other, [motion], name="Kept")

    assert services.project.delete_projects_by_author(author.id) == 2
    assert [p.name for p in db.query(Project).all()] == ["Kept"]


# ============================================================================
# Update
# ============================================================================

def test_update_replaces_categories(services, db, author, motion, branding, make_project):
    project = make_project(author, [motion], name="Switch")

    message = services.project.update_project(
        project.id, ProjectUpdate(name=" Switched ", category_id_list=[branding.id])
    )

    assert message == "Project Switched was updated"
    db.expire_all()
    project = services.project.get_project(project.id)
    assert [c.link for c in project.categories] == ["branding"]


@pytest.mark.parametrize("update", [
    ProjectUpdate(description="new text"),
    ProjectUpdate(description="new text", category_id_list=[]),
])
def test_update_without_categories_keeps_them(services, db, author, motion, make_project, update):
    project = make_project(author, [motion], name="Stay")

    services.project.update_project(project.id, update)

    db.expire_all()
    project = services.project.get_project(project.id)
    assert project.description == "new text"
    assert [c.link for c in project.categories] == ["motion"]


def test_update_unknown_category_changes_nothing(services, db, author, motion, make_project):
    project = make_project(author, [motion], name="Stable")

    with pytest.raises(NotFoundError):
        services.project.update_project(
            project.id, ProjectUpdate(name="Changed", category_id_list=[uuid.uuid4()])
        )

    db.expire_all()
    project = services.project.get_project(project.id)
    assert project.name == "Stable"
    assert [c.link for c in project.categories] == ["motion"]


def test_update_blank_name(services, author, motion, make_project):
    project = make_project(author, [motion])

    with pytest.raises(BadRequestError):
        services.project.update_project(project.id, ProjectUpdate(name="  "))


def test_update_unknown_project(services):
    with pytest.raises(NotFoundError):
        services.project.update_project(uuid.uuid4(), ProjectUpdate(name="x"))
