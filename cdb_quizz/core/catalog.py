"""Static catalogs: badges, avatars, opponents, default sources and the initial profile."""

from __future__ import annotations

from types import MappingProxyType

from cdb_quizz.core.models import (
    AppMode,
    AppSettings,
    Avatar,
    Badge,
    Difficulty,
    LeaderboardEntry,
    Opponent,
    Profile,
    Question,
    QuizSource,
    SourceType,
    Topic,
)

BADGES: tuple[Badge, ...] = (
    Badge("b1", "🥚", "Aprendiz", "Nivel 1: El comienzo", 1),
    Badge("b2", "🥗", "Ayudante", "Nivel 3: Dominas lo básico", 3),
    Badge("b3", "🍷", "Sommelier", "Nivel 5: Experto en bebidas", 5),
    Badge("b4", "👨‍🍳", "Chef", "Nivel 10: Maestro de cocina", 10),
    Badge("b5", "👑", "Maître", "Nivel 20: Leyenda del servicio", 20),
)

AVATARS: tuple[Avatar, ...] = (
    Avatar("🥚", 1),
    Avatar("☕", 1),
    Avatar("🥐", 2),
    Avatar("🥗", 3),
    Avatar("🍺", 3),
    Avatar("🍔", 4),
    Avatar("🍷", 5),
    Avatar("🍇", 5),
    Avatar("🍹", 6),
    Avatar("🧀", 7),
    Avatar("🍕", 8),
    Avatar("🔪", 9),
    Avatar("👨‍🍳", 10),
    Avatar("🥩", 10),
    Avatar("🦞", 12),
    Avatar("🥂", 15),
    Avatar("💎", 18),
    Avatar("👑", 20),
)

OPPONENTS: tuple[Opponent, ...] = (
    Opponent("Becario", "😓", "easy", 8000),
    Opponent("Camarero", "😐", "medium", 5000),
    Opponent("Maître", "🧐", "hard", 3000),
)

FRIEND_OPPONENT = Opponent("Amigo", "👤", "medium", 6000)

# Minimum level required to pick a topic; topics not listed are always open.
TOPIC_LEVEL_LOCKS = MappingProxyType({
    Topic.SERVICE: 3,
    Topic.UTENSILS: 5,
})

MODE_DESCRIPTIONS = MappingProxyType({
    AppMode.CULTURA: "Historia de los bares",
    AppMode.LEGAL: "Derechos, obligaciones y convenio",
    AppMode.L43: "Licor 43 y Café Asiático",
    AppMode.CERVEZA: "Cultura cervecera y estilos",
    AppMode.VINO: "Enología, uvas y maridaje",
    AppMode.IDIOMAS: "Inglés y Francés para hostelería",
})


def _source(source_id: str, name: str, source_type: SourceType, enabled: bool) -> QuizSource:
    return QuizSource(id=source_id, name=name, type=source_type, enabled=enabled)


INITIAL_SOURCES = MappingProxyType({
    AppMode.IDIOMAS: (
        _source("src_oxford", "Oxford Dictionary API", SourceType.API, True),
        _source("src_cambridge", "Cambridge Hospitality Lexicon", SourceType.DATABASE, True),
        _source("src_manual_en", "Manual Override (EN)", SourceType.MANUAL, False),
    ),
    AppMode.CERVEZA: (
        _source("src_bjcp", "BJCP Guidelines 2021", SourceType.DATABASE, True),
        _source("src_murcia_craft", "Asoc. Cerveceros Murcia", SourceType.API, True),
        _source("src_untappd", "Untappd Trends", SourceType.API, False),
    ),
    AppMode.VINO: (
        _source("src_parker", "Robert Parker Ratings", SourceType.DATABASE, True),
        _source("src_do_spain", "D.O. España Oficial", SourceType.API, True),
    ),
    AppMode.L43: (
        _source("src_zamora", "Zamora Company Archives", SourceType.MANUAL, True),
        _source("src_cartagena", "Cartagena History DB", SourceType.DATABASE, True),
    ),
    AppMode.CULTURA: (
        _source("src_repsol", "Guía Repsol", SourceType.API, True),
        _source("src_michelin", "Michelin Guide Spain", SourceType.API, True),
        _source("src_wiki_hist", "Wikipedia (History)", SourceType.API, False),
    ),
    AppMode.LEGAL: (
        _source("src_estatuto", "Estatuto de los Trabajadores", SourceType.DATABASE, True),
        _source("src_convenio_murcia", "Convenio Colectivo Hostelería Murcia", SourceType.DATABASE, True),
    ),
})

MOCK_LEADERBOARD: tuple[LeaderboardEntry, ...] = (
    LeaderboardEntry("PierreGagnaire", 12500, 12, xp_breakdown={
        AppMode.IDIOMAS: 2000, AppMode.CERVEZA: 500, AppMode.VINO: 8000,
        AppMode.L43: 1000, AppMode.CULTURA: 1000,
    }),
    LeaderboardEntry("GordonR", 8400, 8, xp_breakdown={
        AppMode.IDIOMAS: 4000, AppMode.CERVEZA: 3000, AppMode.VINO: 1000,
        AppMode.L43: 200, AppMode.CULTURA: 200,
    }),
    LeaderboardEntry("MassimoB", 6200, 6, xp_breakdown={
        AppMode.IDIOMAS: 1000, AppMode.CERVEZA: 1000, AppMode.VINO: 2000,
        AppMode.L43: 1000, AppMode.CULTURA: 1200,
    }),
    LeaderboardEntry("JoanRoca", 4100, 4, xp_breakdown={
        AppMode.IDIOMAS: 500, AppMode.CERVEZA: 500, AppMode.VINO: 500,
        AppMode.L43: 500, AppMode.CULTURA: 2100,
    }),
)

PLACEHOLDER_QUESTION = Question(
    id="err-1",
    question_text="Error de conexión con el Chef IA.",
    options=("Reintentar", "Esperar", "Salir", "Error"),
    correct_answer="Reintentar",
    explanation="Por favor comprueba tu conexión y API Key.",
    difficulty=Difficulty.EASY,
)


def default_profile() -> Profile:
    """Return the initial profile every new (or reset) user starts with."""
    return Profile(
        settings=AppSettings(),
        quiz_sources={mode: tuple(sources) for mode, sources in INITIAL_SOURCES.items()},
    )
