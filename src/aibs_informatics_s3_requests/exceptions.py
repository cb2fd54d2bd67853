class AWSError(Exception):
    pass


class InvalidArgument(ValueError):
    pass


class MissingRequiredField(InvalidArgument):
    """Raised when a required request member is not set at validation time"""

    def __init__(self, field_name: str, type_name: str):
        self.field_name = field_name
        self.type_name = type_name
        super().__init__(
            f'Missing parameter "{field_name}" when validating the "{type_name}". '
            "The value cannot be null."
        )
