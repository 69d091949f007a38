# ==============================================
# MongoDocumentSink
# ==============================================
#
# PURPOSE:
#   Stores emitted documents in a MongoDB collection.
#
# CLASS: MongoDocumentSink
# ------------------------
#   Stateful — holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, collection, user=None, password=None)
#
#   Methods:
#   --------
#   - connect() -> None       Establish connection and ping the server.
#   - disconnect() -> None    Close connection.
#   - ensure_indexes() -> None
#       Non-unique index on "url": the same url may be stored
#       several times, one entry per emitted record.
#   - emit(key, document) -> None
#       Plain insert. Body is stored as BSON binary.
#   - find(query: dict) -> list[dict]
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MongoDocumentSink(...) as sink:` usage.
#
# ==============================================

import logging
from typing import Optional
from urllib.parse import quote_plus

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure

from .sink import DocumentSink


logger = logging.getLogger(__name__)


class MongoDocumentSink(DocumentSink):
    def __init__(self, host, port, database, collection, user=None, password=None, client=None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.collection_name = collection
        self.user = user
        self.password = password
        self.client: Optional[PyMongoClient] = client
        self.written = 0

    @property
    def uri(self) -> str:
        if self.user and self.password:
            return f"mongodb://{quote_plus(self.user)}:{quote_plus(self.password)}@{self.host}:{self.port}/{self.database}"
        return f"mongodb://{self.host}:{self.port}/{self.database}"

    def connect(self):
        if self.client is None:
            self.client = PyMongoClient(self.uri)
        try:
            self.client.admin.command('ping')
            logger.info("Connected to MongoDB at %s:%s", self.host, self.port)
        except ConnectionFailure as e:
            logger.error("Could not connect to MongoDB: %s", e)
            raise
        except OperationFailure as e:
            logger.error("Authentication failed: %s", e)
            raise

    def disconnect(self):
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB (%d documents written)", self.written)
            self.client = None

    @property
    def collection(self):
        if not self.client:
            raise ConnectionError("Not connected to MongoDB.")
        return self.client[self.database][self.collection_name]

    def ensure_indexes(self):
        self.collection.create_index("url", unique=False)

    def open(self) -> None:
        self.connect()
        self.ensure_indexes()

    def close(self) -> None:
        self.disconnect()

    def emit(self, key, document):
        entry = {"key": key}
        entry.update(document.to_dict(encode_content=False))
        self.collection.insert_one(entry)
        self.written += 1

    def find(self, query):
        return list(self.collection.find(query))
