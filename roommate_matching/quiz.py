"""Preference quiz catalogue."""

QUIZ_QUESTIONS = [
    {
        'id': 'sleepSchedule',
        'question': 'What is your typical sleep schedule?',
        'label': 'Sleep Schedule',
        'options': [
            {'value': 'early', 'label': 'Early bird (sleep early, wake early)'},
            {'value': 'late', 'label': 'Night owl (sleep late, wake late)'},
            {'value': 'mixed', 'label': 'Mixed/Flexible'},
        ],
    },
    {
        'id': 'cleanliness',
        'question': 'How would you describe your cleanliness level?',
        'label': 'Cleanliness',
        'options': [
            {'value': 'very_clean', 'label': 'Very organized and clean'},
            {'value': 'moderately_clean', 'label': 'Moderately clean'},
            {'value': 'messy', 'label': 'Comfortable with some mess'},
        ],
    },
    {
        'id': 'noise',
        'question': 'What is your noise preference?',
        'label': 'Noise Level',
        'options': [
            {'value': 'quiet', 'label': 'I prefer quiet environments'},
            {'value': 'moderate', 'label': 'Some background noise is fine'},
            {'value': 'lively', 'label': 'I enjoy music and lively environments'},
        ],
    },
    {
        'id': 'guests',
        'question': 'How often do you plan to have guests over?',
        'label': 'Guests',
        'options': [
            {'value': 'rarely', 'label': 'Rarely or never'},
            {'value': 'occasionally', 'label': 'Occasionally'},
            {'value': 'frequently', 'label': 'Frequently'},
        ],
    },
    {
        'id': 'sharing',
        'question': 'How do you feel about sharing items (food, appliances, etc.)?',
        'label': 'Sharing',
        'options': [
            {'value': 'separate', 'label': 'I prefer keeping things separate'},
            {'value': 'some_sharing', 'label': 'Some sharing is fine'},
            {'value': 'communal', 'label': 'I prefer a communal approach'},
        ],
    },
]

QUESTIONS_BY_ID = {question['id']: question for question in QUIZ_QUESTIONS}


def option_values(question_id):
    question = QUESTIONS_BY_ID.get(question_id)
    if question is None:
        return set()
    return {option['value'] for option in question['options']}
