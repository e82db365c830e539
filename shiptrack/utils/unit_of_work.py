"""
Undo log for multi-step mutations.

Every attribute change made through a UnitOfWork is recorded as
(entity, attribute, previous value) before it is applied. If the block
fails, the recorded values are replayed in reverse, objects added during the
block are discarded and the session is rolled back before the error
propagates, so callers observe all of the changes or none of them.
"""
from flask import current_app


class UnitOfWork:

    def __init__(self, session, name='unit_of_work'):
        self.session = session
        self.name = name
        self._undo = []
        self._added = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.rollback(reason=exc)
            return False
        self.commit()
        return False

    def record(self, entity, *attrs):
        """Capture the current value of attrs on entity"""
        for attr in attrs:
            value = getattr(entity, attr)
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            self._undo.append((entity, attr, value))

    def set(self, entity, attr, value):
        """Record the previous value, then assign"""
        self.record(entity, attr)
        setattr(entity, attr, value)

    def add(self, entity):
        self._added.append(entity)
        self.session.add(entity)
        return entity

    @property
    def changes(self):
        return len(self._undo)

    def rollback(self, reason=None):
        restored = 0
        for entity, attr, previous in reversed(self._undo):
            setattr(entity, attr, previous)
            restored += 1
        for entity in reversed(self._added):
            if entity in self.session.new:
                self.session.expunge(entity)
        self.session.rollback()
        self._undo.clear()
        self._added.clear()
        current_app.logger.warning(f'{self.name}: rolled back {restored} change(s): {reason}')

    def commit(self):
        self.session.commit()
        self._undo.clear()
        self._added.clear()
