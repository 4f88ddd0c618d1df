from infra.db.reference.repository import SqlAlchemyReferenceDirectory

__all__ = ["SqlAlchemyReferenceDirectory"]
