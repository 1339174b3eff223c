"""Gemeinsamer Mini-Datensatz für die Tests.

Ausgabetag ist Montag, 13.01.2025. Aufbau:

  Lehrkräfte:  100 "Mrs. Smith" (K, 11:00/11:30), 101 "Mr. Jones" (K, 11:30),
               102 "Ms. Brown" (keine Klasse, keine Zeiten)
  Personal:    103 Sam Staff, Eltern: 104 Paula Parent
  Schüler:     1 Anna Adams   K  bei 100
               2 ben Baker    K  bei 101
               3 Clara Clark  5th (Zeiten 11:30/12:00)
               4 David Diaz   K  bei 999 (nicht im Verzeichnis)
               5 Emma Evans   4th (keine Zeiten)
               6 Finn Fox     keine Zuordnung
"""

from datetime import date

import pytest

from models.cafeteria_data import CafeteriaData
from models.grade import GradeLevel, SCHOOL_DAYS, Weekday
from models.lunch_config import (
    DailyLunchTimes,
    GradeLunchTimes,
    SchoolYearLunchConfig,
    StudentAssignment,
    TeacherLunchTimes,
)
from models.order import ItemType, Meal, MealItem, Order
from models.roster import Role, Roster, Student, User

SERVICE_DATE = date(2025, 1, 13)   # Montag
MON = Weekday.MONDAY


def make_roster() -> Roster:
    return Roster(
        students=[
            Student(id=1, first_name="Anna", last_name="Adams"),
            Student(id=2, first_name="ben", last_name="Baker"),
            Student(id=3, first_name="Clara", last_name="Clark"),
            Student(id=4, first_name="David", last_name="Diaz"),
            Student(id=5, first_name="Emma", last_name="Evans"),
            Student(id=6, first_name="Finn", last_name="Fox"),
        ],
        users=[
            User(id=100, name="Mrs. Smith", role=Role.TEACHER),
            User(id=101, name="Mr. Jones", role=Role.TEACHER),
            User(id=102, name="Ms. Brown", role=Role.TEACHER),
            User(id=103, first_name="Sam", last_name="Staff", role=Role.STAFF),
            User(id=104, first_name="Paula", last_name="Parent", role=Role.PARENT),
        ],
    )


def make_lunch_config(extra_assignments=()) -> SchoolYearLunchConfig:
    return SchoolYearLunchConfig(
        name="2024-2025",
        start_date=date(2024, 8, 15),
        end_date=date(2025, 6, 1),
        school_times=[
            DailyLunchTimes(day=d, times=["12:00", "11:00", "11:30"]) for d in SCHOOL_DAYS
        ],
        grade_times=[
            GradeLunchTimes(grade=GradeLevel.FIFTH, day=MON, times=["12:00", "11:30"]),
            GradeLunchTimes(grade=GradeLevel.KINDERGARTEN, day=MON, times=["12:00"]),
        ],
        teacher_times=[
            TeacherLunchTimes(teacher_id=100, day=MON, times=["11:30", "11:00"]),
            TeacherLunchTimes(teacher_id=101, day=MON, times=["11:30"]),
        ],
        grades_by_classroom=[GradeLevel.KINDERGARTEN],
        student_assignments=[
            StudentAssignment(student_id=1, day=MON, grade=GradeLevel.KINDERGARTEN, teacher_id=100),
            StudentAssignment(student_id=2, day=MON, grade=GradeLevel.KINDERGARTEN, teacher_id=101),
            StudentAssignment(student_id=3, day=MON, grade=GradeLevel.FIFTH),
            StudentAssignment(student_id=4, day=MON, grade=GradeLevel.KINDERGARTEN, teacher_id=999),
            StudentAssignment(student_id=5, day=MON, grade=GradeLevel.FOURTH),
            *extra_assignments,
        ],
    )


def _meal(meal_id: int, *items: str, d: date = SERVICE_DATE, **eater) -> Meal:
    types = {"Pizza": ItemType.ENTREE, "pizza": ItemType.ENTREE,
             "Nuggets": ItemType.ENTREE, "Apples": ItemType.SIDE,
             "Cookie": ItemType.DESSERT, "Milk": ItemType.DRINK}
    return Meal(id=meal_id, date=d,
                items=[MealItem(name=n, type=types[n]) for n in items], **eater)


def make_orders() -> list[Order]:
    return [
        Order(id=1, user_id=104, date=date(2025, 1, 6), meals=[
            _meal(1, "Pizza", "Milk", student_id=1),
            _meal(2, "Nuggets", "Apples", student_id=2),
            _meal(3, "Cookie", student_id=1),
            _meal(4, "pizza", "Milk", student_id=3),
            Meal(id=5, date=SERVICE_DATE, student_id=4, time="12:00",
                 items=[MealItem(name="Nuggets", type=ItemType.ENTREE)]),
            _meal(6, "Pizza", student_id=5),
            _meal(7, "Nuggets", student_id=6),
            _meal(8, "Pizza", "Milk"),                                   # Spende
            _meal(9, "Pizza", student_id=1, d=date(2025, 1, 14)),       # anderer Tag
        ]),
        Order(id=2, user_id=100, date=date(2025, 1, 6), meals=[
            _meal(10, "Pizza", "Apples", staff_member_id=100),
        ]),
        Order(id=3, user_id=102, date=date(2025, 1, 6), meals=[
            _meal(11, "Nuggets", staff_member_id=102),
        ]),
        Order(id=4, user_id=103, date=date(2025, 1, 6), meals=[
            _meal(12, "Pizza", "Milk", staff_member_id=103),
        ]),
    ]


@pytest.fixture
def roster() -> Roster:
    return make_roster()


@pytest.fixture
def lunch_config() -> SchoolYearLunchConfig:
    return make_lunch_config()


@pytest.fixture
def orders() -> list[Order]:
    return make_orders()


@pytest.fixture
def mini_data() -> CafeteriaData:
    return CafeteriaData(
        school_name="Test-Schule",
        lunch_config=make_lunch_config(),
        roster=make_roster(),
        orders=make_orders(),
    )
