class PositionStore(object):
    """In-memory uri -> Position mapping

    The single source of truth while plugin is alive. Absence is a missing
    key, nothing here raises.
    """
    def __init__(self, positions=None):
        self.positions = dict(positions or {})

    def get(self, uri):
        return self.positions.get(uri)

    def set(self, uri, position):
        self.positions[uri] = position

    def remove(self, uri):
        return self.positions.pop(uri, None)

    def snapshot(self):
        return dict(self.positions)

    def __contains__(self, uri):
        return uri in self.positions

    def __iter__(self):
        return iter(list(self.positions))

    def __len__(self):
        return len(self.positions)

    def __eq__(self, other):
        if isinstance(other, PositionStore):
            other = other.positions

        return self.positions == other
