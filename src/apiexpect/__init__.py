from apiexpect.array import Array
from apiexpect.assertion import (
    AssertionContext,
    AssertionFailure,
    AssertionList,
    AssertionRange,
    AssertionSeverity,
    AssertionType,
    AssertionValue,
)
from apiexpect.base import Ordered
from apiexpect.boolean import Boolean
from apiexpect.chain import Chain
from apiexpect.config import Config
from apiexpect.date_time import DateTime
from apiexpect.duration import Duration
from apiexpect.environment import Environment
from apiexpect.errors import UsageError
from apiexpect.expect import Expect
from apiexpect.formatter import DefaultFormatter
from apiexpect.handler import (
    DefaultAssertionHandler,
    MultiAssertionHandler,
    ReportAssertionHandler,
)
from apiexpect.number import Number
from apiexpect.object import Object
from apiexpect.report import ReportExporter, build_summary
from apiexpect.reporter import AssertReporter, RecordingReporter
from apiexpect.response import Response, StatusRange
from apiexpect.string import String
from apiexpect.value import Value

__version__ = "0.1.0"
