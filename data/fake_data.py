"""Testdaten-Generator für den Mensaplan.

Erzeugt einen realistischen Datensatz (Schuljahr, Verzeichnis, Bestellungen
einer Woche) mit absichtlichen Lücken, damit Berichte und Konsistenz-Check
etwas zu zeigen haben.

Absichtliche Lücken:
  1. Eine Klassenlehrkraft hat freitags keine Zeit   → Klasse freitags unbestimmt
  2. Der 8. Jahrgang hat mittwochs keine Zeit         → Jahrgang mittwochs unbestimmt
  3. Ein Schüler hat montags keine Zuordnung          → landet in "Other"
  4. Eine Lehrerzeit liegt außerhalb des Pools        → Warnung im Konsistenz-Check
  5. Eine gespendete Mahlzeit ohne Esser              → in keiner Gruppe

Verweise sind immer gültig: der Konsistenz-Check meldet Warnungen, aber
keine Fehler.
"""

import logging
import random
from datetime import date, timedelta
from typing import Optional

from config.schema import CafeteriaConfig
from config.defaults import (
    DEFAULT_CLASSROOM_GRADES,
    DEFAULT_GRADE_TIMES,
    DEFAULT_MENU_ITEMS,
    DEFAULT_SCHOOL_TIMES,
)
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
from scheduling.lunchtime import resolve_student_time
from scheduling.order_window import week_start

logger = logging.getLogger(__name__)

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Emma", "Liam", "Olivia", "Noah", "Ava", "Elijah", "Sophia", "Lucas",
    "Mia", "Mason", "Amelia", "Ethan", "Harper", "Logan", "Evelyn", "James",
    "Abigail", "Aiden", "Ella", "Jackson", "Scarlett", "Levi", "Grace",
    "Mateo", "Chloe", "Henry", "Layla", "Owen", "Zoey", "Wyatt", "Nora",
]

_LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez",
    "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin",
    "Lee", "Perez", "Thompson", "White", "Harris", "Sanchez", "Clark",
    "Ramirez", "Lewis", "Robinson", "Walker", "Young", "Allen", "King",
]

_TEACHER_TITLES = ["Mrs.", "Mr.", "Ms."]

# Jahrgänge der Demo-Schule (Pre-K bis 8th)
_DEMO_GRADES: list[GradeLevel] = [
    GradeLevel.PRE_K, GradeLevel.KINDERGARTEN, GradeLevel.FIRST,
    GradeLevel.SECOND, GradeLevel.THIRD, GradeLevel.FOURTH, GradeLevel.FIFTH,
    GradeLevel.SIXTH, GradeLevel.SEVENTH, GradeLevel.EIGHTH,
]

_STUDENT_ID_START = 1
_USER_ID_START = 1001


class FakeDataGenerator:
    """Generiert einen vollständigen Demo-Datensatz auf Basis der CafeteriaConfig."""

    def __init__(
        self,
        config: CafeteriaConfig,
        seed: Optional[int] = None,
        week_of: Optional[date] = None,
        classes_per_grade: int = 2,
    ) -> None:
        self.config = config
        self.rng = random.Random(seed)
        # Montag der Woche, für die bestellt wird (Default: nächste Woche)
        self.monday = week_start(week_of or date.today() + timedelta(days=7))
        self.classes_per_grade = classes_per_grade
        self._next_student_id = _STUDENT_ID_START
        self._next_user_id = _USER_ID_START
        self._next_meal_id = 1
        self._parent_children: dict[int, list[int]] = {}

    # ─── Namen ────────────────────────────────────────────────────────────────

    def _name(self) -> tuple[str, str]:
        return self.rng.choice(_FIRST_NAMES), self.rng.choice(_LAST_NAMES)

    def _make_user(self, role: Role, display: bool = False) -> User:
        first, last = self._name()
        user = User(
            id=self._next_user_id,
            name=f"{self.rng.choice(_TEACHER_TITLES)} {last}" if display else "",
            first_name=first,
            last_name=last,
            role=role,
            email=f"{first.lower()}.{last.lower()}{self._next_user_id}@example.org",
        )
        self._next_user_id += 1
        return user

    def _make_student(self) -> Student:
        first, last = self._name()
        student = Student(
            id=self._next_student_id,
            first_name=first,
            last_name=last,
            student_number=f"S{self._next_student_id:05d}",
        )
        self._next_student_id += 1
        return student

    # ─── Verzeichnis + Zuordnungen ────────────────────────────────────────────

    def _generate_people(self) -> tuple[Roster, dict[GradeLevel, list[tuple[Optional[int], list[int]]]]]:
        """Erzeugt Benutzer und Schüler.

        Returns:
            (Roster, Jahrgang → [(Klassenlehrkraft oder None, [Schüler-IDs])])
        """
        users = [self._make_user(Role.ADMIN), self._make_user(Role.CAFETERIA)]
        students: list[Student] = []
        classes: dict[GradeLevel, list[tuple[Optional[int], list[int]]]] = {}

        for grade in _DEMO_GRADES:
            classes[grade] = []
            for _ in range(self.classes_per_grade):
                teacher_id: Optional[int] = None
                if grade in DEFAULT_CLASSROOM_GRADES:
                    teacher = self._make_user(Role.TEACHER, display=True)
                    users.append(teacher)
                    teacher_id = teacher.id
                members = [self._make_student() for _ in range(self.rng.randint(4, 7))]
                students.extend(members)
                classes[grade].append((teacher_id, [s.id for s in members]))

        # Fachlehrkräfte ohne eigene Klasse und weiteres Personal
        users.extend(self._make_user(Role.TEACHER, display=True) for _ in range(2))
        users.extend(self._make_user(Role.STAFF) for _ in range(2))

        # Eltern: je 1–3 Kinder
        pool = [s.id for s in students]
        self.rng.shuffle(pool)
        while pool:
            parent = self._make_user(Role.PARENT)
            users.append(parent)
            k = min(len(pool), self.rng.randint(1, 3))
            self._parent_children[parent.id] = [pool.pop() for _ in range(k)]

        return Roster(students=students, users=users), classes

    def _generate_lunch_config(
        self, classes: dict[GradeLevel, list[tuple[Optional[int], list[int]]]]
    ) -> SchoolYearLunchConfig:
        """Schuljahr mit Pool, Jahrgangs- und Lehrerzeiten und Zuordnungen."""
        year = self.monday.year if self.monday.month >= 8 else self.monday.year - 1

        school_times = [
            DailyLunchTimes(day=day, times=times)
            for day, times in DEFAULT_SCHOOL_TIMES.items()
        ]

        grade_times = []
        for grade, t in DEFAULT_GRADE_TIMES.items():
            if grade not in _DEMO_GRADES:
                continue
            for day in SCHOOL_DAYS:
                # Lücke 2: 8. Jahrgang mittwochs ohne Zeit
                if grade == GradeLevel.EIGHTH and day == Weekday.WEDNESDAY:
                    continue
                grade_times.append(GradeLunchTimes(grade=grade, day=day, times=[t]))

        teacher_ids = [
            tid for grade in DEFAULT_CLASSROOM_GRADES
            for tid, _ in classes.get(grade, []) if tid is not None
        ]
        teacher_times = []
        for i, tid in enumerate(teacher_ids):
            base = self.rng.choice(["11:00", "11:30"])
            for day in SCHOOL_DAYS:
                # Lücke 1: erste Klassenlehrkraft freitags ohne Zeit
                if i == 0 and day == Weekday.FRIDAY:
                    continue
                # Lücke 4: zweite Klassenlehrkraft dienstags außerhalb des Pools
                times = ["11:15"] if i == 1 and day == Weekday.TUESDAY else [base]
                teacher_times.append(TeacherLunchTimes(teacher_id=tid, day=day, times=times))

        assignments = []
        first_student: Optional[int] = None
        for grade, groups in classes.items():
            for tid, members in groups:
                for sid in members:
                    if first_student is None:
                        first_student = sid
                    for day in SCHOOL_DAYS:
                        # Lücke 3: erster Schüler montags ohne Zuordnung
                        if sid == first_student and day == Weekday.MONDAY:
                            continue
                        assignments.append(StudentAssignment(
                            student_id=sid, day=day, grade=grade, teacher_id=tid,
                        ))

        return SchoolYearLunchConfig(
            name=f"{year}-{year + 1}",
            start_date=date(year, 8, 15),
            end_date=date(year + 1, 6, 1),
            school_times=school_times,
            grade_times=grade_times,
            teacher_times=teacher_times,
            grades_by_classroom=DEFAULT_CLASSROOM_GRADES,
            student_assignments=assignments,
        )

    # ─── Bestellungen ─────────────────────────────────────────────────────────

    def _make_meal(self, service_date: date, **eater) -> Meal:
        """Mahlzeit aus Hauptgericht, Beilage und Getränk (gelegentlich nur Getränk)."""
        pricing = self.config.pricing
        drinks = [(n, t) for n, t in DEFAULT_MENU_ITEMS if t == ItemType.DRINK]
        if self.rng.random() < 0.1:
            name, typ = self.rng.choice(drinks)
            items = [MealItem(name=name, type=typ, price=pricing.drink_only_price)]
        else:
            items = []
            for typ in (ItemType.ENTREE, ItemType.SIDE, ItemType.DRINK):
                name, _ = self.rng.choice([m for m in DEFAULT_MENU_ITEMS if m[1] == typ])
                price = pricing.meal_price if typ == ItemType.ENTREE else 0.0
                items.append(MealItem(name=name, type=typ, price=price))
        meal = Meal(id=self._next_meal_id, date=service_date, items=items, **eater)
        self._next_meal_id += 1
        return meal

    def _generate_orders(self, roster: Roster, lunch_config: SchoolYearLunchConfig) -> list[Order]:
        """Eine Bestellung pro Eltern-/Lehrerkonto für die Woche."""
        order_date = self.monday - timedelta(days=7)
        days = [self.monday + timedelta(days=i) for i in range(5)]
        orders: list[Order] = []

        for parent_id, children in self._parent_children.items():
            meals = []
            for d in days:
                for sid in children:
                    if self.rng.random() < 0.7:
                        resolved = resolve_student_time(lunch_config, sid, Weekday.of(d))
                        meals.append(self._make_meal(d, student_id=sid, time=resolved.time))
            if meals:
                orders.append(Order(id=len(orders) + 1, user_id=parent_id,
                                    date=order_date, meals=meals))

        # Lehrkräfte und Personal bestellen für sich selbst
        for user in roster.users:
            if user.role not in (Role.TEACHER, Role.STAFF):
                continue
            meals = [
                self._make_meal(d, staff_member_id=user.id)
                for d in days if self.rng.random() < 0.5
            ]
            if meals:
                orders.append(Order(id=len(orders) + 1, user_id=user.id,
                                    date=order_date, meals=meals))

        # Lücke 5: Spende ohne Esser
        admin = next(u for u in roster.users if u.role == Role.ADMIN)
        orders.append(Order(id=len(orders) + 1, user_id=admin.id, date=order_date,
                            meals=[self._make_meal(days[0])]))
        return orders

    # ─── Vollständiger Datensatz ──────────────────────────────────────────────

    def generate(self) -> CafeteriaData:
        """Erzeugt den vollständigen Datensatz als CafeteriaData-Objekt."""
        roster, classes = self._generate_people()
        lunch_config = self._generate_lunch_config(classes)
        orders = self._generate_orders(roster, lunch_config)
        logger.info(
            f"Demo-Daten: {len(roster.students)} Schüler, {len(roster.users)} Benutzer, "
            f"{len(orders)} Bestellungen ab {self.monday}"
        )
        return CafeteriaData(
            school_name=self.config.school_name,
            lunch_config=lunch_config,
            roster=roster,
            orders=orders,
        )

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: CafeteriaData) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Testdaten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        cfg = data.lunch_config
        meals = [m for o in data.orders for m in o.meals]
        table.add_row("Schüler", str(len(data.roster.students)),
                      f"{len(_DEMO_GRADES)} Jahrgänge")
        table.add_row("Lehrkräfte", str(len(data.roster.teachers)),
                      f"{len(cfg.teacher_ids)} mit eigener Klasse")
        table.add_row("Benutzer", str(len(data.roster.users)), "")
        table.add_row("Zuordnungen", str(len(cfg.student_assignments)), "Mo–Fr")
        table.add_row("Bestellungen", str(len(data.orders)),
                      f"{len(meals)} Mahlzeiten, Woche ab {self.monday.strftime('%d.%m.%Y')}")

        console.print(table)
