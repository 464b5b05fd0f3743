# exam_builder/db/models/__init__.py
from .user import User
from .test import IeltsTest
from .section import Section
from .part import Part
from .question import Question, QuestionGroup
from .writing_task import WritingTask
from .link_request import LinkRequest
