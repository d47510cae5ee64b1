"""Pydantic models for the JSON report"""

from pydantic import BaseModel, Field


class DiagnosticModel(BaseModel):
    """A single reported occurrence

    Attributes:
        line: 1-based line number
        col: 1-based column, counted in bytes
        reason: Machine readable reason (e.g. 'trailing_space', 'user_pattern')
        message: Text printed in the diagnostic line
    """

    line: int = Field(..., example=3, description="Line number (1-indexed)")
    col: int = Field(..., example=17, description="Column in bytes (1-indexed)")
    reason: str = Field(..., example="trailing_space", description="Reason code")
    message: str = Field(..., example="trailing whitespace", description="Diagnostic message")


class FileReport(BaseModel):
    """Result of linting one file

    Attributes:
        path: File path as given on the command line
        bad: True when at least one diagnostic was reported
        fixed: True when the file was rewritten
        size_bytes: Size of the file before any fix
        diagnostics: Reported occurrences in match order
    """

    path: str = Field(..., example="src/app.py")
    bad: bool = Field(..., example=True)
    fixed: bool = Field(False, example=False, description="File was rewritten with matches removed")
    size_bytes: int = Field(..., example=1024)
    diagnostics: list[DiagnosticModel] = Field(default_factory=list)


class LintReport(BaseModel):
    """Result of a whole ttlint run"""

    version: str = Field(..., example="0.1.0")
    patterns: list[str] = Field(default_factory=list, example=["FIXME"], description="User patterns")
    fix: bool = Field(..., example=False)
    bad: bool = Field(..., example=True)
    time: float = Field(..., example=0.012, description="Run duration in seconds")
    files: list[FileReport] = Field(default_factory=list)
