import pytest

from reservation_api.errors import Conflict, NotFound
from reservation_api.extensions import db
from reservation_api.models import Reservation, User


def test_create_and_find_by_email(directory):
    user = directory.create(email="grace@example.com", name="Grace", surname="Hopper")

    assert user.id is not None
    found = directory.find_by_email("grace@example.com")
    assert found.id == user.id
    assert directory.find_by_email("missing@example.com") is None


def test_create_already_existing_user(directory):
    directory.create(email="grace@example.com", name="Grace", surname="Hopper")

    with pytest.raises(Conflict, match="already exists"):
        directory.create(email="grace@example.com", name="Other", surname="Person")
    assert User.query.count() == 1


def test_concurrent_create_is_resolved_by_unique_email(directory, monkeypatch):
    directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    # Simulates a second request whose lookup ran before the first commit.
    monkeypatch.setattr(directory, "find_by_email", lambda email: None)

    with pytest.raises(Conflict):
        directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    assert User.query.count() == 1


def test_check_exists(directory):
    user = directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    assert directory.check_exists("grace@example.com").id == user.id

    with pytest.raises(NotFound, match="missing@example.com"):
        directory.check_exists("missing@example.com")


def test_get_user_by_id(directory):
    user = directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    assert directory.get(user.id).email == "grace@example.com"

    with pytest.raises(NotFound):
        directory.get(user.id + 1)


def test_update_user(directory):
    user = directory.create(email="grace@example.com", name="Grace", surname="Hopper")

    updated = directory.update(user.id, name="Amazing", surname="Grace", email="amazing@example.com")

    assert updated.name == "Amazing"
    assert updated.surname == "Grace"
    assert directory.find_by_email("amazing@example.com").id == user.id
    assert directory.find_by_email("grace@example.com") is None


def test_update_non_existent_user(directory):
    with pytest.raises(NotFound):
        directory.update(7, name="Nobody", surname="Here", email="nobody@example.com")
    assert User.query.count() == 0


def test_update_to_taken_email_is_a_conflict(directory):
    directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    alan = directory.create(email="alan@example.com", name="Alan", surname="Turing")

    with pytest.raises(Conflict):
        directory.update(alan.id, name="Alan", surname="Turing", email="grace@example.com")

    db.session.expire_all()
    assert directory.get(alan.id).email == "alan@example.com"


def test_delete_user(directory):
    user = directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    directory.delete(user.id)

    assert directory.find_by_email("grace@example.com") is None
    with pytest.raises(NotFound):
        directory.delete(user.id)


def test_delete_user_removes_their_reservations(directory, book):
    user = directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    book(user.email)

    directory.delete(user.id)
    assert Reservation.query.count() == 0


def test_search_users(directory):
    directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    directory.create(email="alan@example.com", name="Alan", surname="Turing")
    directory.create(email="ada@navy.example.com", name="Ada", surname="Lovelace")

    assert directory.search().total == 3
    assert directory.search("   ").total == 3
    assert [u.email for u in directory.search("hop").items] == ["grace@example.com"]
    assert [u.email for u in directory.search("TURING").items] == ["alan@example.com"]
    assert [u.email for u in directory.search("navy").items] == ["ada@navy.example.com"]
    assert directory.search("nobody").items == []


def test_search_users_paginates(directory):
    for i in range(5):
        directory.create(email=f"user{i}@example.com", name=f"User{i}", surname="Sample")

    page = directory.search(page=2, page_size=2)
    assert [u.name for u in page.items] == ["User2", "User3"]
    assert page.total == 5
    assert page.pages == 3


def test_search_treats_like_wildcards_literally(directory):
    directory.create(email="grace@example.com", name="Grace", surname="Hopper")
    directory.create(email="under_score@example.com", name="Under", surname="Score")

    assert directory.search("%").items == []
    assert [u.email for u in directory.search("_").items] == ["under_score@example.com"]
    assert directory.search("\\").items == []
