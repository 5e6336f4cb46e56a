class TypemasterError(Exception):
    """Base class for application errors."""


class DatabaseError(TypemasterError):
    pass


class LessonError(TypemasterError):
    pass


class ConfigError(TypemasterError):
    pass
