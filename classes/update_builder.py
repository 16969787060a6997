from utils.errors import ValidationError


class UpdateBuilder:
    """
    Collects (column, value) pairs for a partial update.

    Only names declared in the field table can be added, so nothing taken
    from the request ever becomes a column name. `apply()` writes the pairs
    onto a model instance; the ORM turns that into one parameterized UPDATE.
    """

    def __init__(self, fields):
        self._fields = {spec.name: spec for spec in fields}
        self._changes = []

    def add(self, name, value):
        spec = self._fields.get(name)
        if spec is None:
            raise ValidationError(f"Unknown field: {name}")
        self._changes.append((spec.column, value))
        return self

    @property
    def changes(self):
        return list(self._changes)

    @property
    def columns(self):
        return [column for column, _ in self._changes]

    def __len__(self):
        return len(self._changes)

    def __bool__(self):
        return bool(self._changes)

    def apply(self, instance):
        for column, value in self._changes:
            setattr(instance, column, value)
        return instance
