from flask import Blueprint

from classes.request_context import RequestContext
from classes.router import ResourceRouter
from classes.student_manager import StudentManager
from utils.errors import ValidationError
from utils.utils import role_required

# Admin-only student management
student_bp = Blueprint("student", __name__)

students = StudentManager()


def create_or_change_password(ctx):
    action = ctx.param("action")
    if action is None:
        return students.create(ctx)
    if action == "change_password":
        return students.change_password(ctx)
    raise ValidationError(f"Unknown action: {action}")


router = ResourceRouter("students")
router.register("students", "GET", students.list, by_id=students.get, id_params=("student_id", "id"))
router.register("students", "POST", create_or_change_password)
router.register("students", "PUT", students.update)
router.register("students", "DELETE", students.delete)


@student_bp.route("/students", methods=["GET", "POST", "PUT", "DELETE"], strict_slashes=False)
@role_required("admin")
def students_endpoint():
    return router.dispatch("students", RequestContext.from_request())
