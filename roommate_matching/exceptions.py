class MatchingError(Exception):
    """Base class for errors raised while ranking matches"""


class UserNotFound(MatchingError):
    def __init__(self, user_id=None):
        self.user_id = user_id
        super().__init__('User not found')


class QuizNotCompleted(MatchingError):
    def __init__(self, user_id=None):
        self.user_id = user_id
        super().__init__('Quiz answers not found')
