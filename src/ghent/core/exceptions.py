class GhentError(Exception):
    pass


class ConfigurationError(GhentError):
    pass


class InvalidPasswordError(GhentError):
    pass


class MalformedDocumentError(GhentError):
    def __init__(self, collection: str, message: str) -> None:
        super().__init__(f"{collection}: {message}")
        self.collection = collection
        self.message = message
