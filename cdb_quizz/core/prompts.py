"""Prompt templates sent to the question generator."""

from __future__ import annotations

from typing import Sequence

from cdb_quizz.core.models import AppMode, Language, Topic

QUESTIONS_PER_DECK = 10

_SYSTEM_PROMPTS = {
    AppMode.IDIOMAS: "Eres un experto profesor de idiomas para hostelería.",
    AppMode.CERVEZA: (
        "Eres un maestro cervecero y experto Zythosommelier, especializado en el sector "
        "Craft Beer (Cerveza Artesana) e Independiente en España."
    ),
    AppMode.VINO: "Eres un experto Sommelier de prestigio internacional.",
    AppMode.L43: (
        "Eres un embajador de marca de Licor 43 y experto en cultura gastronómica "
        "de Cartagena (Murcia)."
    ),
    AppMode.CULTURA: (
        "Eres un historiador experto en gastronomía, sociología de los bares y la "
        "hostelería española."
    ),
    AppMode.LEGAL: (
        "Eres un abogado laboralista y asesor jurídico experto en el sector de la "
        "hostelería en España."
    ),
}

_USER_PROMPTS = {
    AppMode.CERVEZA: """Genera {count} preguntas tipo test sobre CULTURA CERVECERA.

DISTRIBUCIÓN OBLIGATORIA DEL CONTENIDO:
1. Cultura General (20%): Estilos (IPA, Stout, Sour, Lambic), ingredientes, defectos, servicio.
2. Sector Artesano Nacional - España (30%): Cerveceras independientes relevantes, ferias importantes.
3. Sector Artesano REGIONAL - MURCIA (50% - PRIORIDAD ALTA):
   - Cerveceras artesanas murcianas como: Yakka, El Cantero, Kato, Trinitaria, Cátedra, Pajiza, etc.
   - Figuras del sector craft murciano.
   - Locales especializados en craft beer en Murcia y Cartagena.
   - Premios obtenidos por estas cerveceras.

Idioma: ESPAÑOL.""",
    AppMode.VINO: """Genera {count} preguntas tipo test sobre CULTURA DEL VINO.
Temas: Variedades de uva (nacionales e internacionales), D.O. importantes, proceso de vinificación, crianza, temperatura de servicio, cata y maridajes clásicos.
Idioma: ESPAÑOL.""",
    AppMode.L43: """Genera {count} preguntas tipo test centradas en LICOR 43 y el CAFÉ ASIÁTICO.
Temas: Historia del Licor 43 (ingredientes secretos, origen romano/Liqvor Mirabilis), receta auténtica del Café Asiático de Cartagena, coctelería moderna con Licor 43 y maridajes dulces.
Idioma: ESPAÑOL.""",
    AppMode.CULTURA: """Genera {count} preguntas tipo test sobre CULTURA DE BAR y HOSTELERÍA.
Temas principales:
1. Cultura general: Historia de bares/tabernas, origen de tapas, tipos de establecimientos (Pub, Bistro, Izakaya, Speakeasy), cócteles clásicos con historia, y anécdotas históricas en bares.
2. Hostelería en España: Personajes relevantes del sector.
3. ÉNFASIS ESPECIAL EN REGIÓN DE MURCIA: hosteleros, chefs, bares, restaurantes, cafeterías o discotecas de la Región de Murcia con premios o reconocimientos (Soles Repsol, Estrellas Michelin, Premios de la Hostelería, locales históricos de Murcia y Cartagena).
Idioma: ESPAÑOL.""",
    AppMode.LEGAL: """Genera {count} preguntas tipo test sobre DERECHOS Y OBLIGACIONES LABORALES EN HOSTELERÍA.

FUENTES LEGALES OBLIGATORIAS:
1. Estatuto de los Trabajadores (Marco Nacional).
2. CONVENIO COLECTIVO DE HOSTELERÍA DE LA REGIÓN DE MURCIA (Vigente).

Temas clave:
- Jornada laboral, descansos entre turnos y descansos semanales según convenio.
- Vacaciones anuales y festivos.
- Clasificación profesional y funciones específicas (Grupo I, II, III...).
- Régimen disciplinario: faltas leves, graves y muy graves en el convenio de Murcia.
- Permisos retribuidos (matrimonio, nacimiento, fallecimiento familiar).
- Tipos de contratación habituales (Fijo-Discontinuo).
- Conceptos salariales generales (nocturnidad, antigüedad, etc.), sin cifras exactas.

Idioma: ESPAÑOL.""",
}

_LANGUAGE_PROMPT = (
    'Genera {count} preguntas de vocabulario tipo test para un camarero español que quiere '
    'aprender {language} sobre el tema "{topic}".\n'
    "Las preguntas deben ser prácticas (traducción de ingredientes, frases de cortesía, utensilios)."
)

_DIFFICULTY_MIX = """IMPORTANTE: Las preguntas deben tener variedad de dificultad siguiendo estrictamente esta distribución:
- 3 preguntas [Fácil]: Conceptos básicos, fundamentales o muy populares.
- 4 preguntas [Medio]: Detalles técnicos estándar, procedimientos habituales o historia general.
- 3 preguntas [Difícil]: Datos curiosos específicos, fechas exactas, química detallada o rarezas."""

_OUTPUT_CONTRACT = """Devuelve estrictamente un JSON con este esquema:
{
  "questions": [
    {
      "id": "string",
      "questionText": "string",
      "options": ["string", "string", "string", "string"],
      "correctAnswer": "string",
      "explanation": "string (Breve explicación didáctica citando la norma si es posible)",
      "difficulty": "Fácil | Medio | Difícil"
    }
  ],
  "usedSources": ["string"]
}
usedSources lista los nombres de las fuentes de datos específicas (libros, guías, webs, convenios) consultadas para generar este lote."""


def question_prompt(
    mode: AppMode,
    language: Language | None = None,
    topic: Topic | str | None = None,
    sources: Sequence[str] = (),
    count: int = QUESTIONS_PER_DECK,
) -> str:
    """Build the full generation prompt for one deck."""
    if sources:
        sources_text = (
            "BASE YOUR KNOWLEDGE STRICTLY ON THESE DATA SOURCES IF APPLICABLE: "
            + ", ".join(sources)
            + "."
        )
    else:
        sources_text = "Use general authoritative knowledge sources."

    if mode.is_language_learning:
        topic_text = topic.value if isinstance(topic, Topic) else (topic or "General")
        user_prompt = _LANGUAGE_PROMPT.format(
            count=count,
            language=language.value if language else Language.ENGLISH.value,
            topic=topic_text,
        )
    else:
        user_prompt = _USER_PROMPTS[mode].format(count=count)

    return "\n".join((_SYSTEM_PROMPTS[mode], sources_text, user_prompt, "", _DIFFICULTY_MIX, "", _OUTPUT_CONTRACT))


def pronunciation_prompt(word: str, language: Language) -> str:
    return (
        f'Listen to the audio. The user is a Spanish speaker trying to say the phrase/word related to "{word}" '
        f"in {language.value}.\n"
        "Rate the pronunciation accuracy from 0 to 100.\n"
        "Provide a specific, actionable tip to improve, focusing on common phonetic difficulties for Spanish speakers.\n"
        "Keep the tip very brief (max 2 short sentences).\n"
        "IMPORTANT: The feedback/tip MUST be written in SPANISH.\n"
        'Return JSON: { "score": number, "feedback": string }'
    )


def speech_prompt(text: str, language: Language) -> str:
    return f'Say the following phrase in {language.value} with a perfect accent: "{text}"'


def server_prompt(count: int, topic: str | None, language: str, app_mode: str | None) -> str:
    """Shorter prompt used by the REST backend for slug-based quiz definitions."""
    topic_text = f'sobre el tema "{topic}"' if topic else "sobre un tema general"
    mode_text = f"Modo de aplicación: {app_mode}." if app_mode else ""
    return (
        f"Genera exactamente {count} preguntas de opción múltiple {topic_text} en idioma {language}. "
        f"{mode_text} Cada pregunta debe incluir: id único, questionText, cuatro options como textos, "
        "correctAnswer, explanation y difficulty. Responde únicamente con JSON con la siguiente estructura "
        'exacta: {"questions": [{"id": "q1", "questionText": "...", "options": ["...", "...", "...", "..."], '
        '"correctAnswer": "...", "explanation": "...", "difficulty": "easy"}]}'
    )
