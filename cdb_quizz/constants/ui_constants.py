"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "CdB_ Quizz"
WINDOW_MIN_WIDTH: int = 440
WINDOW_MIN_HEIGHT: int = 760
CARD_WIDTH: int = 340
CARD_HEIGHT: int = 440

LOAD_ERROR_MESSAGE: str = "No se han podido cargar las preguntas en este momento."
SAVE_ERROR_MESSAGE: str = "No se ha podido guardar el resultado."
SAVE_OK_TEMPLATE: str = "Resultado guardado (intento #{attempt_id})."
MICROPHONE_ERROR_MESSAGE: str = "No se pudo acceder al micrófono."
AUDIO_ERROR_MESSAGE: str = "No se pudo generar el audio."
SOUND_DISABLED_MESSAGE: str = "El sonido está desactivado en ajustes."
LOADING_MESSAGE: str = "Generando preguntas…"
ANALYZING_MESSAGE: str = "Analizando pronunciación…"

RESET_PROFILE_QUESTION: str = (
    "¿Estás seguro de que quieres borrar tu progreso TOTAL? "
    "Esta acción no se puede deshacer."
)
RESET_MODE_QUESTION_TEMPLATE: str = "¿Resetear estadísticas solo de {mode}?"

BUTTON_PLAY: str = "Jugar"
BUTTON_SELECT_QUIZ: str = "Cambiar Quizz"
BUTTON_LEADERBOARD: str = "Ranking"
BUTTON_HISTORY: str = "Historial"
BUTTON_ADMIN: str = "Ajustes"
BUTTON_BACK: str = "Volver"
BUTTON_START: str = "Empezar"
BUTTON_CONTINUE: str = "Continuar"
BUTTON_EXIT: str = "Salir"
BUTTON_SHARE: str = "Compartir"
BUTTON_EDIT_PROFILE: str = "Editar perfil"
BUTTON_CREATE_CHALLENGE: str = "Crear Reto"
BUTTON_CHALLENGE_EXPIRED: str = "Tiempo Agotado"
BUTTON_SEND_CHALLENGE: str = "Enviar por WhatsApp"
BUTTON_RECORD: str = "Grabar"
BUTTON_STOP_RECORDING: str = "Parar"
BUTTON_LISTEN: str = "Escuchar"
BUTTON_RESET_MODE: str = "Resetear estadísticas"
BUTTON_RESET_PROFILE: str = "Borrar progreso"
BUTTON_ADD_SOURCE: str = "Añadir fuente"

SWIPE_LEFT_LABEL: str = "Pasar"
SWIPE_RIGHT_LABEL: str = "Descartar"
SWIPE_UP_LABEL: str = "Responder"
SWIPE_DOWN_LABEL: str = "Guardar"

VICTORY_TITLE: str = "¡Victoria!"
DEFEAT_TITLE: str = "¡Sigue practicando!"
EMPTY_HISTORY_MESSAGE: str = "Todavía no has respondido ninguna pregunta."
GLOBAL_LEADERBOARD_TAB: str = "GLOBAL"

BACKGROUND_OPTIONS: tuple[tuple[str, str], ...] = (
    ("#FAF8EE", "Crema Retro"),
    ("#FFFFFF", "Blanco Puro"),
    ("#F0F4F8", "Gris Frío"),
    ("#FFF5F5", "Rosa Pálido"),
    ("#F0FFF4", "Menta Suave"),
)
BUTTON_LAYOUT_LABELS: dict[str, str] = {
    "standard": "Estándar",
    "compact": "Compacto",
    "spread": "Extendido",
}

INTRO_HINT: str = "Haz clic para empezar"
PROFILE_LEVEL_TEMPLATE: str = "Nivel {level} · {xp} XP"
PROFILE_STATS_TEMPLATE: str = "{correct} aciertos · {minutes} min jugados"
PROFILE_DIALOG_TITLE: str = "Editar perfil"
NICKNAME_LABEL: str = "Apodo:"
AVATAR_LABEL: str = "Avatar:"
MENU_TITLE: str = "Elige tu Quizz"
SETUP_TITLE: str = "Prepara la partida"
LANGUAGE_LABEL: str = "Idioma"
TOPIC_LABEL: str = "Tema"
GAME_MODE_LABEL: str = "Modo de juego"
GAME_MODE_SOLO: str = "Solo"
GAME_MODE_DUEL: str = "Duelo"
OPPONENT_LABEL: str = "Rival"
CHALLENGE_LABEL: str = "Reta a un amigo"
CHALLENGE_COUNTDOWN_TEMPLATE: str = "Esperando a tu amigo… {seconds}s"
CHALLENGE_CONNECTED_TEMPLATE: str = "¡{name} se ha unido al duelo!"
LOCKED_TOPIC_TEMPLATE: str = "🔒 {topic} (Nivel {level})"
SCORE_TEMPLATE: str = "Aciertos: {score}"
REMAINING_TEMPLATE: str = "Quedan {remaining}"
DUEL_SCORE_TEMPLATE: str = "Tú {score} – {opponent_score} {avatar} {name}"
STOPWATCH_TEMPLATE: str = "⏱ {seconds:.1f}s"
CORRECT_FEEDBACK: str = "¡Correcto! +50 XP"
INCORRECT_FEEDBACK: str = "Incorrecto. Era: {answer} (+5 XP)"
PRONUNCIATION_RESULT_TEMPLATE: str = "Pronunciación: {score:.0f}/100 · {feedback}"
PRONUNCIATION_BONUS_MESSAGE: str = "¡Bonus de pronunciación! +20 XP"
RESULTS_SCORE_TEMPLATE: str = "{score} / {total} aciertos ({accuracy}%)"
RESULTS_XP_TEMPLATE: str = "+{xp} XP"
RESULTS_DUEL_TEMPLATE: str = "{name}: {opponent_score} aciertos"
RESULTS_DURATION_TEMPLATE: str = "Duración: {seconds}s"
SHARE_COPIED_MESSAGE: str = "Texto copiado al portapapeles."
LEADERBOARD_TITLE: str = "Ranking"
HISTORY_TITLE: str = "Historial"
ADMIN_TITLE: str = "Ajustes"
SOUND_LABEL: str = "Sonido activado"
BACKGROUND_LABEL: str = "Color de fondo:"
BUTTON_LAYOUT_LABEL: str = "Botones de juego:"
BORDER_RADIUS_LABEL: str = "Bordes de tarjeta:"
SOURCES_TITLE_TEMPLATE: str = "Fuentes de {mode}"
NEW_SOURCE_PLACEHOLDER: str = "Nombre de la nueva fuente"
