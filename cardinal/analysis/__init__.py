"""
Cardinal analysis - model-backed yard, sales and crew services.
"""

from cardinal.analysis.job_intel import JobIntel, JobIntelAnalyst
from cardinal.analysis.sales import SalesScriptWriter, ScriptRequest
from cardinal.analysis.yard import YardAnalyzer, YardAssessment

__all__ = [
    "JobIntel",
    "JobIntelAnalyst",
    "SalesScriptWriter",
    "ScriptRequest",
    "YardAnalyzer",
    "YardAssessment",
]
