from flask import Blueprint

from models.resources import Resource
from models.comments import ResourceComment
from classes.crud_resource import CrudResource, CommentResource, FieldSpec, parse_int_key
from classes.request_context import RequestContext
from classes.router import ResourceRouter
from classes.validators import validate_url
from utils.utils import login_required, restricted_to

resource_bp = Blueprint("resources", __name__)

resources = CrudResource(
    name="resource",
    model=Resource,
    key="id",
    fields=[
        FieldSpec("title", sanitize=True),
        FieldSpec("description", sanitize=True),
        FieldSpec("link", parse=validate_url),
    ],
    required=["title", "link"],
    search_columns=[Resource.title, Resource.description],
    sort_columns={"title": Resource.title, "created_at": Resource.created_at},
    default_sort="created_at",
    key_parser=parse_int_key,
)

comments = CommentResource(ResourceComment, resources, "resource_id", key_params=("comment_id", "id"))

# ?action= picks the comment sub-resource; no action means the resources themselves
ACTIONS = {
    None: "resources",
    "comments": "comments",
    "comment": "comments",
    "delete_comment": "comments",
}

router = ResourceRouter("resources")
router.register("resources", "GET", resources.list, by_id=resources.get)
router.register("resources", "POST", restricted_to("admin", resources.create))
router.register("resources", "PUT", restricted_to("admin", resources.update))
router.register("resources", "DELETE", restricted_to("admin", resources.delete))
router.register("comments", "GET", comments.list_for_parent, by_id=comments.get, id_params=("comment_id",))
router.register("comments", "POST", comments.create)
router.register("comments", "DELETE", restricted_to("admin", comments.delete))


@resource_bp.route("/", methods=["GET", "POST", "PUT", "DELETE"], strict_slashes=False)
@login_required
def resources_endpoint():
    ctx = RequestContext.from_request()
    action = ctx.param("action")
    return router.dispatch(ACTIONS.get(action.lower() if action else None, action), ctx)
