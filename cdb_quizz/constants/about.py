"""Static metadata describing CdB Quizz."""

APP_NAME = "CdB_ Quizz"
APP_SUBTITLE = "Cultura de Bar"
APP_VERSION = "0.3"
APP_LICENSE = "GPL-2.0-or-later"
APP_ABOUT_TEXT = (
    "CdB_ Quizz is a swipe-based trivia trainer for hospitality staff. "
    "Decks are generated on demand, every answer earns XP, and your profile "
    "keeps track of levels, badges and the sources used for each quiz."
)

HELP_TEXT = (
    "Swipe the card UP (or press the up arrow) to answer it.\n"
    "Swipe RIGHT to discard the question without penalty.\n"
    "Swipe LEFT or DOWN to send the question to the back of the deck.\n\n"
    "Correct answers earn 50 XP, wrong answers 5 XP. Every 500 XP is a new level."
)

SHARE_URL = "https://culturadebar.com/quizz"
CHALLENGE_SHARE_URL_TEMPLATE = "https://wa.me/?text={text}"
CHALLENGE_SHARE_TEXT = (
    "¡Te reto a un duelo de conocimiento hostelero en CdB_ Quizz! ¿Te atreves?"
)
