import os
import json
import shutil
import logging
from os.path import dirname, exists, realpath

from .position import db_from_json, db_to_json

log = logging.getLogger(__name__)


class StorageError(Exception): pass
class StoreLoadFailure(StorageError): pass
class StoreWriteFailure(StorageError): pass


def save_file(filename, data):
    tmpfilename = realpath(filename) + '.bak'

    try:
        f = open(tmpfilename, 'wb')
    except IOError:
        dname = dirname(tmpfilename)
        if not exists(dname):
            os.makedirs(dname, mode=0o755)
            f = open(tmpfilename, 'wb')
        else:
            raise

    with f:
        f.write(data)

    if exists(filename):
        try:
            shutil.copymode(filename, tmpfilename)
        except OSError:
            pass

    os.replace(tmpfilename, filename)

def decode(data):
    """Returns unicode text of db file content

    Falls back to chardet guess for files which aren't utf-8.
    """
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        import chardet
        result = chardet.detect(data)
        if not result['encoding']:
            raise StoreLoadFailure('Unknown encoding of position db: %s' % e)

        log.info('Position db decoded as %s', result['encoding'])
        try:
            return data.decode(result['encoding'])
        except (UnicodeDecodeError, LookupError) as ee:
            raise StoreLoadFailure(str(ee))

def parse(data):
    """bytes -> {uri: Position}"""
    text = decode(data)
    if not text.strip():
        return {}

    try:
        return db_from_json(json.loads(text))
    except ValueError as e:
        raise StoreLoadFailure('Malformed position db: %s' % e)

def serialize(positions):
    return json.dumps(db_to_json(positions), sort_keys=True).encode('utf-8')


class FileStorage(object):
    """Local filesystem adapter

    ``write`` completes synchronously, callback is called before return
    with None or StoreWriteFailure.
    """
    def read(self, path):
        """Returns file bytes or None if there is no such file"""
        try:
            with open(path, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreLoadFailure(str(e))

    def exists(self, path):
        return os.path.exists(path)

    def mkdir(self, path):
        try:
            os.makedirs(path, mode=0o755, exist_ok=True)
        except OSError as e:
            raise StoreWriteFailure(str(e))

    def write(self, path, data, callback):
        try:
            save_file(path, data)
        except OSError as e:
            callback(StoreWriteFailure(str(e)))
        else:
            callback(None)


def load_positions(storage, path):
    data = storage.read(path)
    if data is None:
        log.debug('There is no position db at %s', path)
        return {}

    return parse(data)
