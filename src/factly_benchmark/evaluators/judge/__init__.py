"""LLM-judge rubric scoring."""

from factly_benchmark.evaluators.judge.client import JudgeClient, parse_judge_response
from factly_benchmark.evaluators.judge.exceptions import JudgeError, JudgeHTTPError

__all__ = ["JudgeClient", "JudgeError", "JudgeHTTPError", "parse_judge_response"]
