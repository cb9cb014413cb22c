import asyncio

import pytest

from edusite.core import seeds
from edusite.core.models import Course, LocalizedText, NewsItem
from edusite.sync import COLLECTIONS, CollectionName, ContentState
from tests.mocks.remote_store import course_row


def _load(state: ContentState) -> None:
    asyncio.run(state.load())


def test_empty_remote_courses_fall_back_to_two_item_seed(state: ContentState) -> None:
    _load(state)

    assert [course.id for course in state.courses] == ["1", "2"]
    assert state.courses == seeds.seed_courses()
    assert state.loading is False
    assert state.loaded is True


def test_every_collection_uses_its_seed_when_remote_is_empty(state: ContentState) -> None:
    _load(state)

    for entry in COLLECTIONS.values():
        assert state.items(entry.name) == entry.seed()
    assert state.messages == []
    assert state.enrollments == []
    assert state.stats == seeds.default_stats()
    assert state.contact_info == seeds.default_contact_info()
    assert state.teacher_image == seeds.DEFAULT_TEACHER_IMAGE


def test_non_empty_remote_rows_are_mirrored_verbatim(service, state: ContentState) -> None:
    rows = [course_row(7, "Fizika"), course_row(3, "Kimyo", extra_column="kept")]
    service.tables["courses"] = rows
    service.tables["messages"] = [
        {"id": 5, "name": "Ali", "email": "ali@test.uz", "message": "Salom", "date": "2025-01-02"},
    ]
    service.tables["enrollments"] = [
        {
            "id": 9,
            "courseId": 3,
            "courseTitle": "Kimyo",
            "studentName": "Vali",
            "studentPhone": "+998901112233",
            "date": "2025-01-03",
        },
    ]
    _load(state)

    assert [course.to_wire(exclude_id=False) for course in state.courses] == [
        {**row, "id": str(row["id"])} for row in rows
    ]
    assert state.messages[0].to_wire(exclude_id=False)["message"] == "Salom"
    enrollment = state.enrollments[0]
    assert enrollment.course_id == "3"
    assert enrollment.to_wire(exclude_id=False)["studentName"] == "Vali"


def test_startup_reads_use_documented_ordering(service, state: ContentState) -> None:
    _load(state)

    orders = {request["table"]: request["params"].get("order") for request in service.requests}
    assert orders["courses"] == "id.desc"
    assert orders["news"] == "date.desc"
    assert orders["achievements"] is None
    assert orders["messages"] == "date.desc"
    assert orders["enrollments"] == "date.desc"


def test_failed_read_falls_back_without_affecting_other_tables(service, state: ContentState) -> None:
    service.tables["news"] = [{"id": 1, "title": "Tadbir", "date": "2025-02-01"}]
    service.fail_on("GET", "courses", "global_stats")
    _load(state)

    assert state.courses == seeds.seed_courses()
    assert state.stats == seeds.default_stats()
    assert [item.id for item in state.news] == ["1"]
    assert state.news[0].title == LocalizedText.same("Tadbir")


def test_singletons_are_read_from_first_row(service, state: ContentState) -> None:
    service.tables["global_stats"] = [
        {
            "id": 1,
            "stat1Label": {"uz": "Bitiruvchilar", "ru": "Выпускники", "en": "Graduates"},
            "stat1Value": "500+",
        }
    ]
    service.tables["contact_info"] = [{"id": 1, "address": "Qarshi", "email": "info@test.uz", "phone": "+998"}]
    service.tables["teacher_profile"] = [{"id": 1, "image_url": "https://img.test/teacher.png"}]
    _load(state)

    assert state.stats.stat1_value == "500+"
    assert state.stats.pairs("en")[0] == ("Graduates", "500+")
    assert state.contact_info.address == "Qarshi"
    assert state.teacher_image == "https://img.test/teacher.png"
    teacher_request = next(request for request in service.requests if request["table"] == "teacher_profile")
    assert teacher_request["params"] == {"select": "image_url", "limit": "1"}


def test_ensure_loaded_reads_only_once(service, state: ContentState) -> None:
    async def _run() -> None:
        await asyncio.gather(state.ensure_loaded(), state.ensure_loaded())
        await state.ensure_loaded()

    asyncio.run(_run())

    course_reads = [request for request in service.requests if request["table"] == "courses"]
    assert len(course_reads) == 1


def test_create_prepends_record_with_remote_id(service, state: ContentState) -> None:
    _load(state)
    before = len(state.courses)
    draft = Course(title=LocalizedText.same("Robototexnika"), id="client-side")

    result = asyncio.run(state.create(CollectionName.COURSES, draft))

    assert result.ok
    assert len(state.courses) == before + 1
    assert state.courses[0].id == result.record.id == "100"
    assert state.courses[0].title.uz == "Robototexnika"
    insert = service.writes()[0]
    assert "id" not in insert["json"][0]


def test_create_failure_leaves_mirror_unchanged(service, state: ContentState) -> None:
    _load(state)
    before = state.news
    service.fail_on("POST", "news")

    result = asyncio.run(state.create("news", NewsItem(title=LocalizedText.same("Yangi"))))

    assert not result.ok
    assert "500" in result.error
    assert state.news == before


def test_update_replaces_only_the_matching_record(service, state: ContentState) -> None:
    service.tables["courses"] = [course_row(2, "Ingliz tili"), course_row(1, "Matematika")]
    _load(state)
    untouched = state.courses[1]
    edited = state.courses[0].model_copy(update={"students": 99, "duration": "6 oy"})

    result = asyncio.run(state.update(CollectionName.COURSES, edited))

    assert result.ok
    assert len(state.courses) == 2
    assert state.courses[0].students == 99
    assert state.courses[0].duration == "6 oy"
    assert state.courses[1] == untouched
    patch = service.writes()[0]
    assert patch["method"] == "PATCH"
    assert patch["params"] == {"id": "eq.2"}
    assert service.tables["courses"][0]["students"] == 99


def test_update_failure_keeps_previous_values(service, state: ContentState) -> None:
    service.tables["courses"] = [course_row(2, "Ingliz tili")]
    _load(state)
    service.fail_on("PATCH", "courses")

    result = asyncio.run(state.update("courses", state.courses[0].model_copy(update={"students": 1})))

    assert not result.ok
    assert state.courses[0].students == 10


def test_update_without_id_fails_without_a_request(service, state: ContentState) -> None:
    _load(state)
    before = state.courses

    result = asyncio.run(state.update("courses", Course(title=LocalizedText.same("Yangi"))))

    assert not result.ok
    assert "without an id" in result.error
    assert service.writes() == []
    assert state.courses == before


def test_admin_deleting_course_one_leaves_course_two(service, state: ContentState) -> None:
    _load(state)

    result = asyncio.run(state.delete(CollectionName.COURSES, "1"))

    assert result.ok
    assert [course.id for course in state.courses] == ["2"]
    assert service.writes()[0]["params"] == {"id": "eq.1"}


def test_delete_failure_keeps_record(service, state: ContentState) -> None:
    _load(state)
    service.fail_on("DELETE", "achievements")

    result = asyncio.run(state.delete("achievements", "a1"))

    assert not result.ok
    assert [item.id for item in state.achievements] == ["a1", "a2"]


def test_deleting_course_keeps_dangling_enrollment(service, state: ContentState) -> None:
    service.tables["enrollments"] = [
        {"id": 1, "courseId": "2", "courseTitle": "IELTS", "studentName": "Vali", "studentPhone": "+998", "date": "2025"}
    ]
    _load(state)

    asyncio.run(state.delete("courses", "2"))

    assert state.find("courses", "2") is None
    assert state.enrollments[0].course_id == "2"
    assert state.enrollments[0].course_title == "IELTS"


def test_singleton_updates_target_row_one(service, state: ContentState) -> None:
    _load(state)
    stats = state.stats.model_copy(update={"stat1_value": "99%"})
    info = state.contact_info.model_copy(update={"phone": "+998 99 000 00 00"})

    async def _run():
        return (
            await state.update_stats(stats),
            await state.update_contact_info(info),
            await state.update_teacher_image("https://img.test/new.png"),
        )

    results = asyncio.run(_run())

    assert all(result.ok for result in results)
    assert state.stats.stat1_value == "99%"
    assert state.contact_info.phone == "+998 99 000 00 00"
    assert state.teacher_image == "https://img.test/new.png"
    writes = service.writes()
    assert [write["table"] for write in writes] == ["global_stats", "contact_info", "teacher_profile"]
    assert all(write["params"] == {"id": "eq.1"} for write in writes)
    assert writes[0]["json"]["stat1Value"] == "99%"
    assert writes[2]["json"] == {"image_url": "https://img.test/new.png"}


def test_singleton_update_failure_keeps_old_value(service, state: ContentState) -> None:
    _load(state)
    service.fail_on("PATCH", "teacher_profile")

    result = asyncio.run(state.update_teacher_image("https://img.test/new.png"))

    assert not result.ok
    assert state.teacher_image == seeds.DEFAULT_TEACHER_IMAGE


def test_items_returns_a_copy(state: ContentState) -> None:
    _load(state)
    courses = state.courses
    courses.clear()

    assert len(state.courses) == 2


def test_unknown_collection_is_rejected(state: ContentState) -> None:
    with pytest.raises(KeyError):
        state.items("teachers")


def test_rows_with_null_columns_are_mirrored_not_replaced_by_seed(service, state: ContentState) -> None:
    service.tables["courses"] = [
        course_row(7, "Fizika"),
        course_row(3, "Kimyo", image=None, students=None, duration=None, title=None, content=None),
    ]
    service.tables["achievements"] = [{"id": 4, "title": None, "description": "Olimpiada", "date": None}]
    _load(state)

    assert [course.id for course in state.courses] == ["7", "3"]
    sparse = state.find("courses", "3")
    assert sparse.students == 0
    assert sparse.image == ""
    assert sparse.duration == ""
    assert sparse.title == LocalizedText()
    assert sparse.content is None
    assert [item.id for item in state.achievements] == ["4"]
    assert state.achievements[0].description == LocalizedText.same("Olimpiada")


def test_inbox_rows_with_null_fields_still_load(service, state: ContentState) -> None:
    service.tables["messages"] = [{"id": 1, "name": "Ali", "email": None, "message": "Salom"}]
    service.tables["enrollments"] = [
        {"id": 2, "courseId": None, "courseTitle": "IELTS", "studentName": None, "studentPhone": "+998", "date": "2025"}
    ]
    _load(state)

    assert state.messages[0].email == ""
    assert state.messages[0].date == ""
    assert state.enrollments[0].course_id is None
    assert state.enrollments[0].student_name == ""


def test_malformed_row_is_skipped_and_the_rest_kept(service, state: ContentState) -> None:
    service.tables["courses"] = [course_row(7, "Fizika"), course_row(3, "Kimyo", students="ko'p")]
    _load(state)

    assert [course.id for course in state.courses] == ["7"]


def test_extra_language_keys_survive_an_update(service, state: ContentState) -> None:
    title = {"uz": "Tarix", "ru": "История", "en": "History", "kk": "Тарих"}
    service.tables["courses"] = [course_row(5, "Tarix", title=title)]
    _load(state)

    assert state.courses[0].to_wire(exclude_id=False)["title"] == title

    edited = state.courses[0].model_copy(update={"students": 12})
    assert asyncio.run(state.update("courses", edited)).ok
    assert service.writes()[0]["json"]["title"] == title
    assert service.tables["courses"][0]["title"] == title


def test_registry_covers_every_collection_name() -> None:
    assert list(COLLECTIONS) == list(CollectionName)
    assert [entry.name for entry in COLLECTIONS.values()] == list(CollectionName)
    assert not hasattr(CollectionName, "choices")
