import asyncio
from datetime import datetime, timezone

from apps.site import ContactForm, PublicSite
from apps.site.public_view import FAILED_NOTICE, INCOMPLETE_NOTICE, SENT_NOTICE, card_view
from edusite.core.models import Course, LocalizedText
from edusite.sync import ContentState

FIXED_NOW = datetime(2025, 3, 8, 9, 30, tzinfo=timezone.utc)


def _public(state: ContentState) -> PublicSite:
    asyncio.run(state.load())
    return PublicSite(state, clock=lambda: FIXED_NOW)


def test_contact_submission_prepends_message_and_clears_form(service, state: ContentState) -> None:
    service.tables["messages"] = [{"id": 1, "name": "Old", "email": "old@test.uz", "message": "Eski", "date": "2024"}]
    public = _public(state)
    form = ContactForm(name="Aziza", email="aziza@test.uz", message="Kursga yozilmoqchiman")

    notice = asyncio.run(public.submit_contact(form, "uz"))

    assert notice.level == "success"
    assert notice.text == SENT_NOTICE["uz"]
    assert form == ContactForm()
    assert [message.name for message in state.messages] == ["Aziza", "Old"]
    assert state.messages[0].date == FIXED_NOW.isoformat()
    inserted = service.writes()[0]["json"][0]
    assert inserted == {
        "name": "Aziza",
        "email": "aziza@test.uz",
        "message": "Kursga yozilmoqchiman",
        "date": FIXED_NOW.isoformat(),
    }


def test_contact_failure_keeps_form_and_mirror(service, state: ContentState) -> None:
    public = _public(state)
    service.fail_on("POST", "messages")
    form = ContactForm(name="Aziza", email="aziza@test.uz", message="Salom")

    notice = asyncio.run(public.submit_contact(form, "en"))

    assert notice.level == "error"
    assert notice.text == FAILED_NOTICE["en"]
    assert form == ContactForm(name="Aziza", email="aziza@test.uz", message="Salom")
    assert state.messages == []


def test_incomplete_form_never_reaches_the_store(service, state: ContentState) -> None:
    public = _public(state)
    form = ContactForm(name="Aziza", email=" ", message="Salom")

    notice = asyncio.run(public.submit_contact(form, "ru"))

    assert notice.text == INCOMPLETE_NOTICE["ru"]
    assert service.writes() == []


def test_snapshot_resolves_every_section_for_language(state: ContentState) -> None:
    public = _public(state)

    snapshot = public.snapshot("en")

    assert snapshot.language == "en"
    assert [card.title for card in snapshot.courses] == [
        "Mathematics: Algorithms and Logic",
        "English: IELTS Masterclass",
    ]
    assert snapshot.news[0].category == "News"
    assert snapshot.stats[0].label == "Job Placement"
    assert snapshot.stats[0].value == "98%"
    assert snapshot.contact["email"] == "it-yakkabog@edu.uz"
    assert set(snapshot.social_links) == {"instagram", "telegram", "youtube", "facebook"}
    assert snapshot.teacher_image


def test_unknown_language_falls_back_to_uzbek(state: ContentState) -> None:
    public = _public(state)

    assert public.snapshot("de").language == "uz"


def test_card_content_falls_back_to_description() -> None:
    course = Course(
        id="5",
        title=LocalizedText.same("Dasturlash"),
        description=LocalizedText(uz="Python asoslari", ru="Основы Python", en="Python basics"),
        category=LocalizedText.same("IT"),
    )

    card = card_view(course, "ru")

    assert card.content == "Основы Python"
    assert card.category == "IT"


def test_details_return_none_for_unknown_ids(state: ContentState) -> None:
    public = _public(state)

    assert public.course_detail("1", "uz").title == "Matematika: Algoritmlar va Mantiq"
    assert public.course_detail("404") is None
    assert public.news_detail("n1", "en").date == "2024-09-01"
    assert public.news_detail("missing") is None
