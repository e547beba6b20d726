def serialize_user(user):
    """Public representation of a user with their profile and mood"""
    profile = getattr(user, 'profile', None)

    data = {
        'id': user.id,
        'email': user.email,
        'name': user.display_name,
        'quiz_completed': user.quiz_completed,
        'quiz_completed_at': user.quiz_completed_at.isoformat() if user.quiz_completed_at else None,
        'date_joined': user.date_joined.isoformat(),
    }

    if profile is not None:
        data.update({
            'gender': profile.gender or None,
            'university': profile.university,
            'bio': profile.bio,
            'location': profile.location,
            'max_budget': int(profile.max_budget) if profile.max_budget is not None else None,
            'move_in_date': profile.move_in_date.isoformat() if profile.move_in_date else None,
            'preferences': profile.preferences,
            'mood': profile.mood,
        })

    return data
