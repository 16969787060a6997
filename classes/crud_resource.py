from flask import current_app
from sqlalchemy.exc import IntegrityError

from models import db
from classes.update_builder import UpdateBuilder
from utils.errors import Conflict, NotFound, ServerError, ValidationError
from utils.helpers import sanitize_input, send_response

SORT_ORDERS = ("asc", "desc")


def is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False

def parse_text(name):
    def parse(value):
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise ValueError(f"{name} must be a string")
        return str(value)
    return parse

def parse_int_key(value):
    try:
        key = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValueError("Invalid or missing id")
    if key < 1:
        raise ValueError("Invalid or missing id")
    return key


class FieldSpec:
    """One writable field: where it lives and how to clean it."""

    def __init__(self, name, column=None, parse=None, sanitize=False,
                 unique=False, updatable=True):
        self.name = name
        self.column = column or name
        self.parse = parse or parse_text(name)
        self.sanitize = sanitize
        self.unique = unique
        self.updatable = updatable

    def clean(self, value):
        try:
            value = self.parse(value)
        except ValueError as e:
            raise ValidationError(str(e))
        if self.sanitize and isinstance(value, str):
            value = sanitize_input(value)
        return value

    def __repr__(self):
        return f"<FieldSpec {self.name}>"


class CrudResource:
    """
    List / get / create / update / delete for one table, driven by a
    declarative description of the entity.

    `key` is the request field and model attribute identifying a record
    (`id`, `week_id`, ...). `sort_columns` maps the names a request may pass
    in `sort` to model columns; anything else falls back to `default_sort`.
    """

    def __init__(self, name, model, key, fields, required, search_columns=(),
                 sort_columns=None, default_sort=None, key_params=None,
                 key_parser=None):
        self.name = name
        self.label = name.capitalize()
        self.model = model
        self.key = key
        self.fields = list(fields)
        self.required = list(required)
        self.search_columns = list(search_columns)
        self.sort_columns = dict(sort_columns or {})
        self.default_sort = default_sort
        self.key_params = tuple(key_params or (key,))
        self.key_parser = key_parser
        self.comments = None

    # -- lookups -----------------------------------------------------------

    def base_query(self):
        return self.model.query

    def parse_key(self, raw):
        if is_blank(raw):
            raise ValidationError(f"Missing {self.key_params[0]} parameter")
        if self.key_parser is None:
            return str(raw).strip()
        try:
            return self.key_parser(raw)
        except ValueError as e:
            raise ValidationError(str(e))

    def find(self, key):
        return self.base_query().filter(getattr(self.model, self.key) == key).first()

    def get_or_404(self, key):
        instance = self.find(key)
        if instance is None:
            raise NotFound(f"{self.label} not found")
        return instance

    def key_of(self, instance):
        return getattr(instance, self.key)

    def serialize(self, instance):
        return instance.to_dict()

    # -- validation --------------------------------------------------------

    def collect(self, data, updating=False):
        """Clean every field present in `data` into an UpdateBuilder."""
        builder = UpdateBuilder(self.fields)
        for spec in self.fields:
            if updating and not spec.updatable:
                continue
            if spec.name not in data or data[spec.name] is None:
                continue
            value = data[spec.name]
            if spec.name in self.required and is_blank(value):
                raise ValidationError(f"{spec.name} cannot be empty")
            builder.add(spec.name, spec.clean(value))
        return builder

    def check_unique(self, values, instance=None):
        for spec in self.fields:
            if not spec.unique or spec.column not in values:
                continue
            column = getattr(self.model, spec.column)
            query = self.model.query.filter(column == values[spec.column])
            if instance is not None:
                query = query.filter(self.model.id != instance.id)
            if query.first() is not None:
                raise Conflict(f"{spec.name} already exists")

    def build(self, values):
        return self.model(**values)

    # -- handlers ----------------------------------------------------------

    def list(self, ctx):
        query = self.base_query()

        search = (ctx.param("search") or "").strip()
        if search and self.search_columns:
            query = query.filter(db.or_(*[
                column.contains(search, autoescape=True) for column in self.search_columns
            ]))

        sort = ctx.param("sort")
        column = self.sort_columns.get(sort, self.sort_columns.get(self.default_sort))
        order = (ctx.param("order") or "asc").lower()
        if order not in SORT_ORDERS:
            order = "asc"

        if column is not None:
            query = query.order_by(column.desc() if order == "desc" else column.asc())
        query = query.order_by(self.model.id.asc())

        return send_response({"data": [self.serialize(row) for row in query.all()]})

    def get(self, ctx, key):
        instance = self.get_or_404(self.parse_key(key))
        return send_response({"data": self.serialize(instance)})

    def create(self, ctx):
        data = ctx.body
        for name in self.required:
            if is_blank(data.get(name)):
                raise ValidationError(f"Missing required field: {name}")

        values = dict(self.collect(data).changes)
        self.check_unique(values)

        instance = self.build(values)
        db.session.add(instance)
        self.commit()

        current_app.logger.info("Created %s %s", self.name, self.key_of(instance))
        return send_response({
            "message": f"{self.label} created successfully",
            "data": self.serialize(instance),
        }, 201)

    def update(self, ctx):
        raw_key = ctx.first_param(*self.key_params)
        if is_blank(raw_key):
            raise ValidationError(f"{self.key_params[0]} is required for update")
        instance = self.get_or_404(self.parse_key(raw_key))

        builder = self.collect(ctx.body, updating=True)
        if not builder:
            raise ValidationError("No fields provided to update")

        self.check_unique(dict(builder.changes), instance)
        builder.apply(instance)
        self.commit()

        current_app.logger.info("Updated %s %s (%s)", self.name, self.key_of(instance), ", ".join(builder.columns))
        return send_response({
            "message": f"{self.label} updated successfully",
            "data": self.serialize(instance),
        })

    def delete(self, ctx):
        raw_key = ctx.first_param(*self.key_params)
        instance = self.get_or_404(self.parse_key(raw_key))
        key = self.key_of(instance)

        try:
            removed_comments = 0
            if self.comments is not None:
                removed_comments = self.comments.delete_for_parent(instance)
            deleted = self.model.query.filter(self.model.id == instance.id).delete(synchronize_session=False)
            if deleted == 0:
                raise ServerError(f"Failed to delete {self.name}")
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info("Deleted %s %s and %d comment(s)", self.name, key, removed_comments)
        message = f"{self.label} deleted successfully"
        if self.comments is not None:
            message = f"{self.label} and associated comments deleted successfully"
        return send_response({"message": message})

    def commit(self):
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise Conflict(f"{self.label} already exists")


class CommentResource:
    """Comments hanging off one parent CrudResource."""

    def __init__(self, model, parent, parent_field, parent_attr=None, key_params=("id",)):
        self.model = model
        self.parent = parent
        self.parent_field = parent_field
        self.parent_attr = parent_attr or parent.key
        self.key_params = tuple(key_params)
        parent.comments = self

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_field)

    def delete_for_parent(self, parent_instance):
        value = getattr(parent_instance, self.parent_attr)
        return self.model.query.filter(self.parent_column == value).delete(synchronize_session=False)

    def get_or_404(self, raw_key):
        if is_blank(raw_key):
            raise ValidationError("Missing comment id")
        try:
            comment_id = parse_int_key(raw_key)
        except ValueError:
            raise ValidationError("Invalid or missing comment id")
        comment = db.session.get(self.model, comment_id)
        if comment is None:
            raise NotFound("Comment not found")
        return comment

    def list_for_parent(self, ctx, parent_key=None):
        if parent_key is None:
            parent_key = ctx.param(self.parent_field)
        if is_blank(parent_key):
            raise ValidationError(f"Missing {self.parent_field} parameter")
        parent_key = self.parent.parse_key(parent_key)

        comments = (
            self.model.query
            .filter(self.parent_column == parent_key)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .all()
        )
        return send_response({"data": [c.to_dict() for c in comments]})

    def get(self, ctx, key):
        return send_response({"data": self.get_or_404(key).to_dict()})

    def create(self, ctx):
        data = ctx.body
        for name in (self.parent_field, "author", "text"):
            if data.get(name) is None or data.get(name) == "":
                raise ValidationError(f"Missing required field: {name}")

        text = data["text"].strip() if isinstance(data["text"], str) else ""
        if not text:
            raise ValidationError("Comment text cannot be empty")
        try:
            author = parse_text("author")(data["author"]).strip()
        except ValueError as e:
            raise ValidationError(str(e))
        if not author:
            raise ValidationError("author cannot be empty")

        parent = self.parent.find(self.parent.parse_key(data[self.parent_field]))
        if parent is None:
            raise NotFound(f"{self.parent.label} not found for this comment")

        comment = self.model(**{
            self.parent_field: getattr(parent, self.parent_attr),
            "author": sanitize_input(author),
            "text": sanitize_input(text),
        })
        db.session.add(comment)
        db.session.commit()

        current_app.logger.info("Comment %s added to %s %s", comment.id, self.parent.name, getattr(parent, self.parent_attr))
        return send_response({
            "message": "Comment created successfully",
            "data": comment.to_dict(),
        }, 201)

    def delete(self, ctx):
        comment_id = self.get_or_404(ctx.first_param(*self.key_params)).id
        deleted = self.model.query.filter(self.model.id == comment_id).delete(synchronize_session=False)
        if deleted == 0:
            db.session.rollback()
            raise ServerError("Failed to delete comment")
        db.session.commit()

        current_app.logger.info("Deleted comment %s", comment_id)
        return send_response({"message": "Comment deleted successfully"})
