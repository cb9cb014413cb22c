from __future__ import annotations

import os
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from apps.outline import OutlineChapter
from apps.site import AdminConsole, AuthenticationError, ContactForm, SiteSnapshot
from apps.site.public_view import CardView
from edusite.core.models import Achievement, ContactInfo, Course, GlobalStats, NewsItem, Record
from edusite.runtime import SiteContext, bootstrap_site
from edusite.sync import MutationResult

REPO_ROOT = Path(__file__).resolve().parents[2]


@lru_cache
def get_site() -> SiteContext:
    repo_root = os.getenv("EDUSITE_REPO_ROOT")
    return bootstrap_site(repo_root=Path(repo_root).expanduser().resolve() if repo_root else REPO_ROOT)


async def loaded_site(site: SiteContext = Depends(get_site)) -> SiteContext:
    await site.state.ensure_loaded()
    return site


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def admin_console(
    authorization: str | None = Header(default=None),
    site: SiteContext = Depends(loaded_site),
) -> AdminConsole:
    try:
        return AdminConsole(site.state, site.gate, _bearer_token(authorization), generator=site.generator)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


class HealthResponse(BaseModel):
    status: str
    loaded: bool


class ContactRequest(BaseModel):
    name: str = ""
    email: str = ""
    message: str = ""
    lang: str | None = None


class ContactResponse(BaseModel):
    level: str
    text: str
    form: Dict[str, str]


class LanguageRequest(BaseModel):
    language: str


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str


class TeacherImageRequest(BaseModel):
    image_url: str = Field(..., min_length=1)


class OutlineRequest(BaseModel):
    title: str = ""
    category: str = ""
    language: str = "uz"


class OutlineResponse(BaseModel):
    outline: List[OutlineChapter]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    if get_site.cache_info().currsize:
        await get_site().aclose()
        get_site.cache_clear()


app = FastAPI(title="Education Center Content API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health(site: SiteContext = Depends(get_site)) -> HealthResponse:
    return HealthResponse(status="ok", loaded=site.state.loaded)


# public view -------------------------------------------------------------


@app.get("/content", response_model=SiteSnapshot)
def get_content(
    lang: str | None = Query(None, description="uz, ru or en; defaults to the saved preference"),
    site: SiteContext = Depends(loaded_site),
) -> SiteSnapshot:
    return site.public.snapshot(lang or site.preferences.language)


@app.get("/courses/{course_id}", response_model=CardView)
def get_course(course_id: str, lang: str | None = None, site: SiteContext = Depends(loaded_site)) -> CardView:
    detail = site.public.course_detail(course_id, lang or site.preferences.language)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Course {course_id} not found")
    return detail


@app.get("/news/{news_id}", response_model=CardView)
def get_news(news_id: str, lang: str | None = None, site: SiteContext = Depends(loaded_site)) -> CardView:
    detail = site.public.news_detail(news_id, lang or site.preferences.language)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"News item {news_id} not found")
    return detail


@app.post("/contact", response_model=ContactResponse)
async def submit_contact(payload: ContactRequest, site: SiteContext = Depends(loaded_site)) -> ContactResponse:
    form = ContactForm(name=payload.name, email=payload.email, message=payload.message)
    notice = await site.public.submit_contact(form, payload.lang or site.preferences.language)
    response = ContactResponse(
        level=notice.level,
        text=notice.text,
        form={"name": form.name, "email": form.email, "message": form.message},
    )
    if notice.level == "error":
        raise HTTPException(status_code=422 if not form.is_complete() else 502, detail=response.model_dump())
    return response


@app.get("/preferences/language", response_model=LanguageRequest)
def get_language(site: SiteContext = Depends(get_site)) -> LanguageRequest:
    return LanguageRequest(language=site.preferences.language)


@app.put("/preferences/language", response_model=LanguageRequest)
def set_language(payload: LanguageRequest, site: SiteContext = Depends(get_site)) -> LanguageRequest:
    try:
        language = site.preferences.set(payload.language)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return LanguageRequest(language=language)


# admin console -----------------------------------------------------------


@app.post("/admin/login", response_model=LoginResponse)
async def admin_login(payload: LoginRequest, site: SiteContext = Depends(loaded_site)) -> LoginResponse:
    try:
        token = await site.gate.login(payload.username, payload.password)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return LoginResponse(token=token)


@app.post("/admin/logout", status_code=204)
def admin_logout(console: AdminConsole = Depends(admin_console)) -> None:
    console.logout()


@app.get("/admin/dashboard")
def admin_dashboard(console: AdminConsole = Depends(admin_console)) -> Dict[str, int]:
    return console.dashboard()


@app.get("/admin/inbox")
def admin_inbox(site: SiteContext = Depends(loaded_site), console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return {
        "messages": [_dump(record) for record in site.state.messages],
        "enrollments": [_dump(record) for record in site.state.enrollments],
    }


@app.post("/admin/courses", status_code=201)
async def create_course(course: Course, console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return _mutation_response(await console.add_course(course))


@app.put("/admin/courses/{course_id}")
async def update_course(course_id: str, course: Course, console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return _mutation_response(await console.update_course(course.model_copy(update={"id": course_id})))


@app.delete("/admin/courses/{course_id}", status_code=204)
async def delete_course(course_id: str, console: AdminConsole = Depends(admin_console)) -> None:
    _mutation_response(await console.delete_course(course_id))


@app.post("/admin/news", status_code=201)
async def create_news(item: NewsItem, console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return _mutation_response(await console.add_news(item))


@app.put("/admin/news/{news_id}")
async def update_news(news_id: str, item: NewsItem, console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return _mutation_response(await console.update_news(item.model_copy(update={"id": news_id})))


@app.delete("/admin/news/{news_id}", status_code=204)
async def delete_news(news_id: str, console: AdminConsole = Depends(admin_console)) -> None:
    _mutation_response(await console.delete_news(news_id))


@app.post("/admin/achievements", status_code=201)
async def create_achievement(item: Achievement, console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return _mutation_response(await console.add_achievement(item))


@app.put("/admin/achievements/{achievement_id}")
async def update_achievement(
    achievement_id: str,
    item: Achievement,
    console: AdminConsole = Depends(admin_console),
) -> Dict[str, Any]:
    return _mutation_response(await console.update_achievement(item.model_copy(update={"id": achievement_id})))


@app.delete("/admin/achievements/{achievement_id}", status_code=204)
async def delete_achievement(achievement_id: str, console: AdminConsole = Depends(admin_console)) -> None:
    _mutation_response(await console.delete_achievement(achievement_id))


@app.delete("/admin/messages/{message_id}", status_code=204)
async def delete_message(message_id: str, console: AdminConsole = Depends(admin_console)) -> None:
    _mutation_response(await console.delete_message(message_id))


@app.delete("/admin/enrollments/{enrollment_id}", status_code=204)
async def delete_enrollment(enrollment_id: str, console: AdminConsole = Depends(admin_console)) -> None:
    _mutation_response(await console.delete_enrollment(enrollment_id))


@app.put("/admin/contact-info")
async def update_contact_info(info: ContactInfo, console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return _mutation_response(await console.update_contact_info(info))


@app.put("/admin/stats")
async def update_stats(stats: GlobalStats, console: AdminConsole = Depends(admin_console)) -> Dict[str, Any]:
    return _mutation_response(await console.update_stats(stats))


@app.put("/admin/teacher-image")
async def update_teacher_image(
    payload: TeacherImageRequest,
    console: AdminConsole = Depends(admin_console),
) -> Dict[str, Any]:
    return _mutation_response(await console.update_teacher_image(payload.image_url))


@app.post("/admin/outline", response_model=OutlineResponse)
async def generate_outline(payload: OutlineRequest, console: AdminConsole = Depends(admin_console)) -> OutlineResponse:
    if not payload.title.strip():
        raise HTTPException(status_code=400, detail="Course title is required")
    result = await console.generate_outline(payload.title, payload.category, payload.language)
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.notice)
    return OutlineResponse(outline=result.outline.outline)


def _dump(value: Any) -> Any:
    if isinstance(value, Record) or isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    return value


def _mutation_response(result: MutationResult) -> Dict[str, Any]:
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    record = _dump(result.record)
    return record if isinstance(record, dict) else {"value": record}
