class BaseFeedreaderException(Exception):
    pass


class InvalidRequest(BaseFeedreaderException):
    """ Invalid paging input provided by the User

    Reported when the page size is out of range, or the direction makes no sense for the request
    """

    def __init__(self, err: str):
        super().__init__(f'Invalid page request: {err}')


class InvalidCursor(BaseFeedreaderException):
    """ The cursor could not be used

    Reported when the cursor token fails to decode, or was issued for a different scope
    """

    def __init__(self, err: str):
        super().__init__(f'Invalid cursor: {err}')


class StorageError(BaseFeedreaderException):
    """ The database failed to execute a query

    This class is used to augment SqlAlchemy errors: the original error is always available as `__cause__`
    """


class NotFoundError(StorageError):
    """ A row referenced by its primary key does not exist """

    def __init__(self, model: str, id):
        self.model = model
        self.id = id

        super().__init__(f'{model} #{id} not found')
