import re

from flask import Blueprint

from models.weeks import Week
from models.comments import WeekComment
from classes.crud_resource import CrudResource, CommentResource, FieldSpec, parse_text
from classes.request_context import RequestContext
from classes.router import ResourceRouter
from classes.validators import validate_date, validate_length, validate_string_list
from utils.helpers import dump_json_list
from utils.utils import login_required, restricted_to

weekly_bp = Blueprint("weekly", __name__)

UNSAFE_KEY_CHARS = re.compile(r"[&<>\"']")


def parse_week_id(value):
    """week_id is stored and looked up verbatim, so markup characters are refused."""
    value = parse_text("week_id")(value).strip()
    validate_length("week_id", value, 50)
    if UNSAFE_KEY_CHARS.search(value):
        raise ValueError("week_id must not contain & < > \" or '")
    return value


weeks = CrudResource(
    name="week",
    model=Week,
    key="week_id",
    fields=[
        FieldSpec("week_id", parse=parse_week_id, unique=True, updatable=False),
        FieldSpec("title", sanitize=True),
        FieldSpec("start_date", parse=lambda v: validate_date(parse_text("start_date")(v), "start_date")),
        FieldSpec("description", sanitize=True),
        FieldSpec("links", parse=lambda v: dump_json_list(validate_string_list(v, "links"))),
    ],
    required=["week_id", "title", "start_date", "description"],
    search_columns=[Week.title, Week.description],
    sort_columns={"title": Week.title, "start_date": Week.start_date, "created_at": Week.created_at},
    default_sort="start_date",
    key_parser=parse_week_id,
)

comments = CommentResource(WeekComment, weeks, "week_id")

router = ResourceRouter("weekly")
router.register("weeks", "GET", weeks.list, by_id=weeks.get, id_params=("week_id",))
router.register("weeks", "POST", restricted_to("admin", weeks.create))
router.register("weeks", "PUT", restricted_to("admin", weeks.update))
router.register("weeks", "DELETE", restricted_to("admin", weeks.delete))
router.register("comments", "GET", comments.list_for_parent)
router.register("comments", "POST", comments.create)
router.register("comments", "DELETE", restricted_to("admin", comments.delete))


@weekly_bp.route("/", methods=["GET", "POST", "PUT", "DELETE"], strict_slashes=False)
@login_required
def weekly_endpoint():
    ctx = RequestContext.from_request()
    return router.dispatch(ctx.resource("weeks"), ctx)
