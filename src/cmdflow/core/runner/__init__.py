from cmdflow.core.runner.abc import PipelineRunner
from cmdflow.core.runner.fake import FakePipelineRunner, RunCall
from cmdflow.core.runner.real import AsyncioPipelineRunner

__all__ = ["AsyncioPipelineRunner", "FakePipelineRunner", "PipelineRunner", "RunCall"]
