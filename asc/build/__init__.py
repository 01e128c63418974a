from .core.orchestrator import BuildContext, BuildOrchestrator, BuildReport
