"""Exceptions raised at the edges of the engine (stores, importer, submission)."""


class MasteryEngineError(Exception):
    """Base class for errors the CLI reports to the user."""


class RuleValidationError(MasteryEngineError):
    pass


class ImportFormatError(MasteryEngineError):
    pass


class UnknownStudentError(MasteryEngineError):
    def __init__(self, student_id: str):
        super().__init__(f"Unknown student: {student_id}")
        self.student_id = student_id


class UnknownSkillError(MasteryEngineError):
    def __init__(self, skill_id: str):
        super().__init__(f"Unknown skill: {skill_id}")
        self.skill_id = skill_id
