import pytest

from src.db.database import BootcampDB, ReviewDB
from src.services import bootcamps, reviews
from src.services.errors import (
    GeocodingError,
    NotAuthorized,
    NotFound,
    PolicyViolation,
    ValidationFailed,
)

from helpers import MIAMI, bootcamp_payload, review_payload


def test_create_stamps_owner_and_geocodes_address(db, alice, geocoder):
    bootcamp = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    assert bootcamp.user_id == "alice"
    assert bootcamp.slug == "devworks-bootcamp"
    assert (bootcamp.longitude, bootcamp.latitude) == (MIAMI.longitude, MIAMI.latitude)
    assert bootcamp.city == "Miami"
    assert bootcamp.photo == "no-photo.jpg"
    assert bootcamp.careers == ["Web Development", "UI/UX"]
    assert geocoder.calls == ["1 Main St, Miami FL"]


def test_create_rejects_owner_in_payload(db, alice, geocoder):
    with pytest.raises(ValidationFailed) as exc:
        bootcamps.create_bootcamp(db, alice, bootcamp_payload(user_id="bob"), geocoder)

    assert "user_id" in exc.value.fields


def test_second_bootcamp_for_user_is_rejected(db, alice, geocoder):
    bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    with pytest.raises(PolicyViolation) as exc:
        bootcamps.create_bootcamp(db, alice, bootcamp_payload(name="Second Camp"), geocoder)

    assert exc.value.status_code == 400
    assert db.query(BootcampDB).count() == 1


def test_admin_can_publish_many_bootcamps(db, admin, geocoder):
    bootcamps.create_bootcamp(db, admin, bootcamp_payload(), geocoder)
    bootcamps.create_bootcamp(db, admin, bootcamp_payload(name="Second Camp"), geocoder)

    assert db.query(BootcampDB).filter_by(user_id="root").count() == 2


def test_create_fails_without_insert_when_geocoding_fails(db, alice, geocoder):
    with pytest.raises(GeocodingError):
        bootcamps.create_bootcamp(db, alice, bootcamp_payload(address="nowhere"), geocoder)

    assert db.query(BootcampDB).count() == 0


def test_create_validates_fields(db, alice, geocoder):
    with pytest.raises(ValidationFailed) as exc:
        bootcamps.create_bootcamp(
            db, alice, bootcamp_payload(name="x" * 51, careers=["Cooking"]), geocoder
        )

    assert exc.value.fields == ["careers.0", "name"]
    assert geocoder.calls == []


def test_get_missing_bootcamp(db):
    with pytest.raises(NotFound):
        bootcamps.get_bootcamp(db, "missing")


def test_owner_updates_bootcamp(db, alice, geocoder):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    updated = bootcamps.update_bootcamp(db, alice, created.id, {"name": "Renamed Camp", "housing": False})

    assert updated.name == "Renamed Camp"
    assert updated.slug == "renamed-camp"
    assert updated.housing is False
    assert updated.description == "Full stack web development in twelve weeks"


def test_other_user_cannot_update(db, alice, bob, geocoder):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    with pytest.raises(NotAuthorized):
        bootcamps.update_bootcamp(db, bob, created.id, {"name": "Hijacked"})

    db.expire_all()
    assert bootcamps.get_bootcamp(db, created.id).name == "Devworks Bootcamp"


def test_admin_updates_any_bootcamp(db, alice, admin, geocoder):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    updated = bootcamps.update_bootcamp(db, admin, created.id, {"average_cost": 9000})

    assert updated.average_cost == 9000
    assert updated.user_id == "alice"


def test_update_missing_bootcamp_is_not_found_not_denied(db, bob):
    with pytest.raises(NotFound):
        bootcamps.update_bootcamp(db, bob, "missing", {"name": "x"})


def test_update_revalidates_merged_result(db, alice, geocoder):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    with pytest.raises(ValidationFailed) as exc:
        bootcamps.update_bootcamp(db, alice, created.id, {"description": None})
    assert exc.value.fields == ["description"]

    with pytest.raises(ValidationFailed) as exc:
        bootcamps.update_bootcamp(db, alice, created.id, {"user_id": "bob"})
    assert exc.value.fields == ["user_id"]

    db.expire_all()
    unchanged = bootcamps.get_bootcamp(db, created.id)
    assert unchanged.description == "Full stack web development in twelve weeks"
    assert unchanged.user_id == "alice"


def test_delete_twice(db, alice, geocoder):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    bootcamps.delete_bootcamp(db, alice, created.id)

    with pytest.raises(NotFound):
        bootcamps.delete_bootcamp(db, alice, created.id)


def test_other_user_cannot_delete(db, alice, bob, geocoder):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    with pytest.raises(NotAuthorized):
        bootcamps.delete_bootcamp(db, bob, created.id)

    assert db.query(BootcampDB).count() == 1


@pytest.mark.parametrize("cascade,remaining", [(True, 0), (False, 1)])
def test_delete_review_cascade_policy(db, alice, bob, geocoder, cascade, remaining):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)
    reviews.create_review(db, bob, created.id, review_payload())

    bootcamps.delete_bootcamp(db, alice, created.id, cascade_reviews=cascade)

    assert db.query(BootcampDB).count() == 0
    assert db.query(ReviewDB).filter_by(bootcamp_id=created.id).count() == remaining


def test_bootcamps_in_radius(db, alice, geocoder):
    created = bootcamps.create_bootcamp(db, alice, bootcamp_payload(), geocoder)

    found = bootcamps.bootcamps_in_radius(db, "33101", 10, geocoder)

    assert [b.id for b in found] == [created.id]


def test_radius_search_checks_distance_before_geocoding(db, geocoder):
    with pytest.raises(ValidationFailed):
        bootcamps.bootcamps_in_radius(db, "33101", "far", geocoder)

    assert geocoder.calls == []


def test_radius_search_aborts_on_unknown_zipcode(db, geocoder):
    with pytest.raises(GeocodingError):
        bootcamps.bootcamps_in_radius(db, "00000", 10, geocoder)
