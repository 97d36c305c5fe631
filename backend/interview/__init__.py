# Interview module
from .catalog import QuestionCatalog
from .state import InterviewStateMachine
from .scoring import AnswerEvaluator, KeywordEvaluator
from .summary import SummaryAggregator
