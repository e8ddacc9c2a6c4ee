from sqlalchemy import select


class BaseRepository:
    """Common document operations over one model, bound to an injected session"""

    model = None

    def __init__(self, session):
        self.session = session

    def get(self, doc_id):
        """Fetch one document by primary key, or None"""
        return self.session.get(self.model, doc_id)

    def find_all(self, order_by=None, descending=False):
        """Fetch every document, optionally ordered by a column name"""
        query = select(self.model)
        if order_by:
            column = getattr(self.model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        return self.session.execute(query).scalars().all()

    def add(self, **fields):
        """Insert a new document and return it with its generated id"""
        instance = self.model(**fields)
        self.session.add(instance)
        self.session.commit()
        return instance

    def update(self, instance, **fields):
        """Set the given fields on a document"""
        for key, value in fields.items():
            setattr(instance, key, value)
        self.session.commit()
        return instance

    def delete(self, instance):
        self.session.delete(instance)
        self.session.commit()
