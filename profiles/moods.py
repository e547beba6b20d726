from collections import namedtuple

Mood = namedtuple('Mood', ['name', 'emoji', 'color'])

MOODS = [
    Mood('Happy', '😊', '#FFE66D'),
    Mood('Tired', '😴', '#60A5FA'),
    Mood('Chill', '😎', '#4ADE80'),
    Mood('Curious', '🤔', '#C084FC'),
    Mood('Excited', '🎉', '#F472B6'),
    Mood('Focused', '📚', '#818CF8'),
]

MOODS_BY_NAME = {mood.name.lower(): mood for mood in MOODS}

DEFAULT_MOOD = MOODS[0]
DEFAULT_MOOD_STATUS = 'Just joined!'


def get_mood(name):
    """Look up a mood by name, case-insensitively; None if unknown"""
    if not isinstance(name, str):
        return None
    return MOODS_BY_NAME.get(name.strip().lower())


def mood_catalogue():
    return [mood._asdict() for mood in MOODS]
