class StorageError(Exception):
    """Base class for store-level rejections."""


class DuplicateScenarioError(StorageError):
    def __init__(self, name: str):
        super().__init__("Scenario name already exists")
        self.name = name


class InvalidEmailError(StorageError):
    def __init__(self, email: str):
        super().__init__("Invalid email format")
        self.email = email
