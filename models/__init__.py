"""
Persistence package: SQLAlchemy models plus the process-wide DBStorage
singleton shared by the API layer and the auth service.
"""
from models.db_storage import DBStorage

storage = DBStorage()
storage.reload()
