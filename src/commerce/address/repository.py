"""Repository for AddressBook aggregates, one per user."""

from protean.utils.globals import current_domain

from commerce.address.address import Address, AddressBook
from commerce.domain import commerce


@commerce.repository(part_of=AddressBook)
class AddressBookRepository:
    def for_user(self, user_id) -> AddressBook | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first

    def for_user_or_new(self, user_id) -> AddressBook:
        return self.for_user(user_id) or AddressBook.create(user_id=str(user_id))

    def address_query(self, **filters):
        """Addresses across every book, filtered on address fields."""
        return current_domain.repository_for(Address)._dao.query.filter(**filters)

    def owners_of(self, addresses) -> dict:
        """Map each address book id among ``addresses`` to its user id."""
        book_ids = {str(a.address_book_id) for a in addresses}
        if not book_ids:
            return {}
        books = self._dao.query.filter(id__in=list(book_ids)).limit(len(book_ids)).all().items
        return {str(book.id): book.user_id for book in books}
