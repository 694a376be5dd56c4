"""Position records and their json form

Records are immutable, so a plain dict copy of the store is already a deep
copy and ``==`` compares every field.

On disk a record looks like::

    {"scroll": 12.5,
     "cursor": {"from": {"ch": 0, "line": 4}, "to": {"ch": 0, "line": 4}},
     "lastSavedTime": 1700000000000}

"""
import logging
from collections import namedtuple

log = logging.getLogger(__name__)

Point = namedtuple('Point', 'line ch')
Cursor = namedtuple('Cursor', 'anchor head')


class Position(namedtuple('Position', 'cursor scroll saved_time')):
    __slots__ = ()

    def __new__(cls, cursor=None, scroll=None, saved_time=None):
        return super(Position, cls).__new__(cls, cursor, scroll, saved_time)

    @property
    def is_empty(self):
        return self.cursor is None and self.scroll is None

    def stamped(self, saved_time):
        return self._replace(saved_time=saved_time)


def round_scroll(value):
    return round(float(value), 4)

def point_to_json(point):
    return {'ch': point.ch, 'line': point.line}

def point_from_json(data):
    line, ch = data['line'], data['ch']
    if not isinstance(line, int) or not isinstance(ch, int) or line < 0 or ch < 0:
        raise ValueError('Bad point %r' % (data,))

    return Point(line, ch)

def to_json(position):
    result = {}
    if position.scroll is not None:
        result['scroll'] = position.scroll

    if position.cursor is not None:
        result['cursor'] = {
            'from': point_to_json(position.cursor.anchor),
            'to': point_to_json(position.cursor.head),
        }

    if position.saved_time is not None:
        result['lastSavedTime'] = position.saved_time

    return result

def from_json(data):
    """Builds position from decoded json value

    Unknown keys are ignored, broken ``cursor`` or ``scroll`` fields are
    treated as absent. Raises ValueError if data is not an object.
    """
    if not isinstance(data, dict):
        raise ValueError('Position must be an object, got %r' % (data,))

    cursor = None
    if 'cursor' in data:
        try:
            cursor = Cursor(point_from_json(data['cursor']['from']),
                point_from_json(data['cursor']['to']))
        except (KeyError, TypeError, ValueError):
            log.debug('Ignore malformed cursor %r', data['cursor'])

    scroll = data.get('scroll')
    if isinstance(scroll, bool) or not isinstance(scroll, (int, float)):
        scroll = None

    saved_time = data.get('lastSavedTime')
    if isinstance(saved_time, bool) or not isinstance(saved_time, (int, float)):
        saved_time = None
    else:
        saved_time = int(saved_time)

    return Position(cursor, scroll, saved_time)

def db_to_json(positions):
    return dict((uri, to_json(p)) for uri, p in positions.items())

def db_from_json(data):
    if not isinstance(data, dict):
        raise ValueError('Position db must be an object')

    result = {}
    for uri, value in data.items():
        try:
            position = from_json(value)
        except ValueError:
            log.warning('Skip malformed position entry for %s', uri)
            continue

        if position.is_empty:
            log.warning('Skip position entry without cursor and scroll for %s', uri)
            continue

        result[uri] = position

    return result
