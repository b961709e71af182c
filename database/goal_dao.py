from database.field_map import Field, FieldMap, as_float, as_str
from database.record_dao import RecordDAO
from models.goal import Goal


class GoalDAO(RecordDAO):
    table = "goal_c"
    field_map = FieldMap(Goal, [
        Field("name", "name_c", as_str, str),
        Field("target_amount", "target_amount_c", as_float, float),
        Field("current_amount", "current_amount_c", as_float, float),
        Field("deadline", "deadline_c", as_str, str),
        Field("created_at", "created_at_c", as_str, str),
    ])

    def _display_name(self, values: dict) -> str | None:
        return values.get("name", "")
