"""Datenmodelle für Schüler, Benutzer und das Schülerverzeichnis (Pydantic v2)."""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, model_validator


class Role(IntEnum):
    ADMIN = 0
    TEACHER = 1
    PARENT = 2
    CAFETERIA = 3
    STAFF = 4


class Student(BaseModel):
    """Ein Schüler; Jahrgang und Lehrkraft stehen in den Zuordnungen."""

    id: int
    first_name: str
    last_name: str
    student_number: str = ""      # Schul-interne Schülernummer

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class User(BaseModel):
    """Ein Benutzerkonto (Lehrkraft, Personal, Eltern, …)."""

    id: int
    name: str = ""                # Anzeigename, z.B. "Mrs. Smith"; leer = Vor- + Nachname
    first_name: str = ""
    last_name: str = ""
    role: Role = Role.PARENT
    email: str = ""

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_teacher(self) -> bool:
        return self.role == Role.TEACHER


class Roster(BaseModel):
    """Schüler und Benutzer eines Schuljahres."""

    students: list[Student] = []
    users: list[User] = []

    @model_validator(mode="after")
    def _check_unique_ids(self):
        for label, ids in (
            ("Schüler", [s.id for s in self.students]),
            ("Benutzer", [u.id for u in self.users]),
        ):
            if len(ids) != len(set(ids)):
                dupes = sorted({i for i in ids if ids.count(i) > 1})
                raise ValueError(f"{label}-IDs mehrfach vergeben: {dupes}")
        return self

    def get_student(self, student_id: int) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    def get_user(self, user_id: int) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    @property
    def teachers(self) -> list[User]:
        """Lehrerverzeichnis: alle Benutzer mit Rolle TEACHER."""
        return [u for u in self.users if u.is_teacher]

    def teacher_directory(self) -> dict[int, User]:
        return {u.id: u for u in self.teachers}

    def student_name(self, student_id: int) -> str:
        """Anzeigename; unbekannte Schüler erhalten einen Platzhalter."""
        student = self.get_student(student_id)
        return student.display_name if student else f"Student #{student_id}"

    def user_name(self, user_id: int) -> str:
        user = self.get_user(user_id)
        return user.display_name if user else f"Staff #{user_id}"
