import os
import json


class TracksWriter:
    """Appends one JSON record per tick."""
    def __init__(self, path):
        dirname = os.path.dirname(path)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        self.path = path
        self.f = open(path, 'w', encoding='utf-8')

    def write(self, rec: dict):
        self.f.write(json.dumps(rec) + '\n')

    def close(self):
        self.f.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
