from models.grade import GradeLevel, Weekday, SCHOOL_DAYS
from models.time_rule import Anchor, MealServiceWindow, PeriodUnit, RelativeTimeRule
from models.roster import Role, Roster, Student, User
from models.order import ItemType, Meal, MealItem, Order
from models.lunch_config import (
    DailyLunchTimes,
    GradeLunchTimes,
    SchoolYearLunchConfig,
    StudentAssignment,
    TeacherLunchTimes,
)
from models.cafeteria_data import CafeteriaData, CafeteriaDataError, ConsistencyReport

__all__ = [
    "GradeLevel",
    "Weekday",
    "SCHOOL_DAYS",
    "Anchor",
    "MealServiceWindow",
    "PeriodUnit",
    "RelativeTimeRule",
    "Role",
    "Roster",
    "Student",
    "User",
    "ItemType",
    "Meal",
    "MealItem",
    "Order",
    "DailyLunchTimes",
    "GradeLunchTimes",
    "SchoolYearLunchConfig",
    "StudentAssignment",
    "TeacherLunchTimes",
    "CafeteriaData",
    "CafeteriaDataError",
    "ConsistencyReport",
]
