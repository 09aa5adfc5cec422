"""Errors raised by the lending engine.

Three families:

* ``LendingValidationError``: the request cannot be honoured as made
  (inactive book or user, no copies, duplicate borrow, bad due date).
* ``ConsistencyError``: a concurrent writer won a race or an invariant
  check tripped. The engine rolls back and re-raises these as
  ``BorrowingConflictError`` which callers may retry.
* ``AlreadyTerminalError``: the loan is already returned or canceled.
"""


class LendingError(Exception):
    default_message = 'Lending operation failed.'
    code = 'lending_error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class LendingValidationError(LendingError):
    default_message = 'Invalid lending request.'
    code = 'invalid'


class BookInactiveError(LendingValidationError):
    default_message = 'The book is not active.'
    code = 'book_inactive'


class UserInactiveError(LendingValidationError):
    default_message = 'The user is not active.'
    code = 'user_inactive'


class NoCopiesAvailableError(LendingValidationError):
    default_message = 'Book is not available.'
    code = 'no_copies_available'


class AlreadyBorrowedError(LendingValidationError):
    default_message = 'You have already borrowed this book.'
    code = 'already_borrowed'


class InvalidDueDateError(LendingValidationError):
    default_message = "Due date can't be in the past."
    code = 'invalid_due_date'


class ConsistencyError(LendingError):
    default_message = 'Lending records are out of step.'
    code = 'consistency'


class ExhaustedError(ConsistencyError):
    default_message = 'No copies left to lend.'
    code = 'exhausted'


class CopyOverflowError(ConsistencyError):
    default_message = 'Available copies cannot exceed total copies.'
    code = 'copy_overflow'


class DuplicateActiveLoanError(ConsistencyError):
    default_message = 'An active loan already exists for this user and book.'
    code = 'duplicate_active_loan'


class BorrowingConflictError(LendingError):
    default_message = 'The request conflicted with another update, please retry.'
    code = 'conflict'
    retryable = True


class AlreadyTerminalError(LendingError):
    default_message = 'This loan is already closed.'
    code = 'already_terminal'


class AlreadyReturnedError(AlreadyTerminalError):
    default_message = 'Book has already been returned.'
    code = 'already_returned'


class AlreadyCanceledError(AlreadyTerminalError):
    default_message = 'Borrowing has already been canceled.'
    code = 'already_canceled'
