from .common import ApiResponse, ErrorResponse
from .patients import RegisterPatientSchema
from .sessions import CreateSessionSchema, EndSessionSchema, UpdateSessionSchema
from .summaries import ApproveSummarySchema, GenerateSummarySchema, UpdateSummarySchema
from .transcriptions import EditTranscriptionSchema

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "RegisterPatientSchema",
    "CreateSessionSchema",
    "EndSessionSchema",
    "UpdateSessionSchema",
    "ApproveSummarySchema",
    "GenerateSummarySchema",
    "UpdateSummarySchema",
    "EditTranscriptionSchema",
]
