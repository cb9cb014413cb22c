"""Static seed and default content shown when the remote store has no rows."""

from __future__ import annotations

from typing import List

from .models import Achievement, ContactInfo, Course, GlobalStats, LocalizedText, NewsItem

DEFAULT_TEACHER_IMAGE = "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2?q=80&w=800"


def _text(uz: str, ru: str, en: str) -> LocalizedText:
    return LocalizedText(uz=uz, ru=ru, en=en)


def seed_courses() -> List[Course]:
    return [
        Course(
            id="1",
            title=_text(
                "Matematika: Algoritmlar va Mantiq",
                "Математика: Алгоритмы и Логика",
                "Mathematics: Algorithms and Logic",
            ),
            description=_text(
                "Boshlang'ich va o'rta darajadagi talabalar uchun chuqurlashtirilgan matematika kursi.",
                "Углублённый курс математики для студентов начального и среднего уровня.",
                "An in-depth mathematics course for beginner and intermediate students.",
            ),
            category=_text("Aniq fanlar", "Точные науки", "Exact sciences"),
            students=120,
            duration="3 oy",
            image="https://picsum.photos/seed/math/800/600",
            content=_text(
                "Mantiqiy mulohazalar, algoritmlar murakkabligi va graf nazariyasi.",
                "Логические рассуждения, сложность алгоритмов и теория графов.",
                "Logical reasoning, algorithm complexity and graph theory.",
            ),
        ),
        Course(
            id="2",
            title=_text(
                "Ingliz tili: IELTS Masterclass",
                "Английский язык: IELTS Masterclass",
                "English: IELTS Masterclass",
            ),
            description=_text(
                "IELTS imtihonidan 7.5+ ball olishni maqsad qilganlar uchun intensiv trening.",
                "Интенсивный тренинг для тех, кто нацелен на 7.5+ баллов IELTS.",
                "Intensive training for students aiming at an IELTS band of 7.5+.",
            ),
            category=_text("Tillar", "Языки", "Languages"),
            students=85,
            duration="4 oy",
            image="https://picsum.photos/seed/english/800/600",
            content=_text(
                "Writing, Reading, Listening va Speaking bo'yicha haftalik sinov imtihonlari.",
                "Еженедельные пробные экзамены по Writing, Reading, Listening и Speaking.",
                "Weekly mock exams across Writing, Reading, Listening and Speaking.",
            ),
        ),
    ]


def seed_news() -> List[NewsItem]:
    return [
        NewsItem(
            id="n1",
            title=_text(
                "Yangi o'quv yili boshlandi",
                "Начался новый учебный год",
                "The new academic year has started",
            ),
            description=_text(
                "Barcha yo'nalishlar bo'yicha qabul davom etmoqda.",
                "Продолжается набор по всем направлениям.",
                "Enrollment is open for every track.",
            ),
            content=_text(
                "Markazimizda yangi guruhlar ochildi. Ro'yxatdan o'tish uchun biz bilan bog'laning.",
                "В нашем центре открыты новые группы. Свяжитесь с нами для записи.",
                "New groups have opened at our center. Contact us to sign up.",
            ),
            date="2024-09-01",
            image="https://picsum.photos/seed/news/800/600",
        ),
    ]


def seed_achievements() -> List[Achievement]:
    return [
        Achievement(
            id="a1",
            title=_text(
                "Yilning eng yaxshi o'qituvchisi",
                "Лучший учитель года",
                "Teacher of the Year",
            ),
            date="2023",
            description=_text(
                "Xalq ta'limi vazirligi tomonidan taqdirlandim.",
                "Награждена Министерством народного образования.",
                "Awarded by the Ministry of Public Education.",
            ),
        ),
        Achievement(
            id="a2",
            title=_text("Google Certified Educator", "Google Certified Educator", "Google Certified Educator"),
            date="2022",
            description=_text(
                "Xalqaro sertifikat sohibi.",
                "Обладатель международного сертификата.",
                "Holder of an international certificate.",
            ),
        ),
    ]


def default_stats() -> GlobalStats:
    return GlobalStats(
        stat1_label=_text("Ish bilan ta'minlash", "Трудоустройство", "Job Placement"),
        stat1_value="98%",
        stat2_label=_text("IT Yo'nalishlar", "IT Направления", "IT Directions"),
        stat2_value="15+",
        stat3_label=_text("Mentorlar", "Менторы", "Mentors"),
        stat3_value="50+",
        stat4_label=LocalizedText.same("IELTS 7.0+"),
        stat4_value="200+",
    )


def default_contact_info() -> ContactInfo:
    return ContactInfo(
        address="Yakkabog' tumani, Markaziy IT bino",
        email="it-yakkabog@edu.uz",
        phone="+998 90 123 45 67",
        instagram="https://instagram.com",
        telegram="https://t.me",
        youtube="https://youtube.com",
        facebook="https://facebook.com",
    )


__all__ = [
    "DEFAULT_TEACHER_IMAGE",
    "default_contact_info",
    "default_stats",
    "seed_achievements",
    "seed_courses",
    "seed_news",
]
