"""
MongoEngine document holding one whole stored collection.

Each key used by the Store ('reptiles', 'entries') maps to exactly one
document whose primary key is that key. Replacing the document replaces the
whole collection in a single write, which is what the Store expects from a
persistence adapter.
"""

import datetime
import mongoengine


def _utc_now():
    return datetime.datetime.now(datetime.timezone.utc)


"""
Stored collection document in the 'collections' collection (db alias: 'core').

Fields:
    key: Collection key ('reptiles' or 'entries'); used as the _id.
    records: List of wire-format records (see data.codec).
    saved_date: When the collection was last written (aware UTC).

Notes:
    - records are kept as raw dicts; validation of their content belongs to
      data.codec so that JSON files and MongoDB are checked the same way.
    - strict=False so that an unexpected extra field in the stored document
      does not fail the load before the codec gets to inspect the records.
"""
class StoredCollection(mongoengine.Document):
    key = mongoengine.StringField(primary_key=True)
    records = mongoengine.ListField(mongoengine.DictField())
    saved_date = mongoengine.DateTimeField(default=_utc_now) # Evaluated per save via the callable.

    meta = {
        'db_alias': 'core',
        'collection': 'collections',
        'strict': False,
    }
