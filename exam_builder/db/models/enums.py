import enum


class EntityKind(str, enum.Enum):
    TEST = "test"
    LISTENING = "listening"
    READING = "reading"
    WRITING = "writing"
    LISTENING_PART = "listening_part"
    READING_PART = "reading_part"
    WRITING_TASK = "writing_task"
    QUESTION = "question"


class SectionKind(str, enum.Enum):
    LISTENING = "listening"
    READING = "reading"
    WRITING = "writing"


class PartKind(str, enum.Enum):
    LISTENING = "listening"
    READING = "reading"


class TestMode(str, enum.Enum):
    PRACTICE = "practice"
    MOCK = "mock"


class TestStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class QuestionType(str, enum.Enum):
    COMPLETION = "completion"
    MULTIPLE_CHOICE = "multiple-choice"
    MULTI_SELECT = "multi-select"
    SELECTION = "selection"
    DRAGGABLE_SELECTION = "draggable-selection"
    MATCHING_INFORMATION = "matching-information"


class UserRole(str, enum.Enum):
    TEACHER = "teacher"
    STUDENT = "student"


PART_LABELS = {
    PartKind.LISTENING: ("PART_1", "PART_2", "PART_3", "PART_4"),
    PartKind.READING: ("PART_1", "PART_2", "PART_3"),
}
