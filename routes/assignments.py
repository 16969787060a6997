from flask import Blueprint

from models.assignment import Assignment
from models.comments import AssignmentComment
from classes.crud_resource import CrudResource, CommentResource, FieldSpec, parse_int_key, parse_text
from classes.request_context import RequestContext
from classes.router import ResourceRouter
from classes.validators import validate_date, validate_string_list
from utils.helpers import dump_json_list
from utils.utils import login_required, restricted_to

assignment_bp = Blueprint("assignments", __name__)

assignments = CrudResource(
    name="assignment",
    model=Assignment,
    key="id",
    fields=[
        FieldSpec("title", sanitize=True),
        FieldSpec("description", sanitize=True),
        FieldSpec("due_date", parse=lambda v: validate_date(parse_text("due_date")(v), "due_date")),
        FieldSpec("files", parse=lambda v: dump_json_list(validate_string_list(v, "files"))),
    ],
    required=["title", "description", "due_date"],
    search_columns=[Assignment.title, Assignment.description],
    sort_columns={"title": Assignment.title, "due_date": Assignment.due_date, "created_at": Assignment.created_at},
    default_sort="created_at",
    key_parser=parse_int_key,
)

comments = CommentResource(AssignmentComment, assignments, "assignment_id")

router = ResourceRouter("assignments")
router.register("assignments", "GET", assignments.list, by_id=assignments.get)
router.register("assignments", "POST", restricted_to("admin", assignments.create))
router.register("assignments", "PUT", restricted_to("admin", assignments.update))
router.register("assignments", "DELETE", restricted_to("admin", assignments.delete))
router.register("comments", "GET", comments.list_for_parent, by_id=comments.get)
router.register("comments", "POST", comments.create)
router.register("comments", "DELETE", restricted_to("admin", comments.delete))


@assignment_bp.route("/", methods=["GET", "POST", "PUT", "DELETE"], strict_slashes=False)
@login_required
def assignments_endpoint():
    ctx = RequestContext.from_request()
    return router.dispatch(ctx.resource(), ctx)
