"""
Question → answer pipeline built on LangGraph.

Usage:
    orchestrator = QueryOrchestrator(fetcher, classifier, generator)
    status, payload = await orchestrator.run(QueryRequest(airport="DXB", question="..."))
"""
from flight_assistant.agent.graph import QueryOrchestrator

__all__ = ["QueryOrchestrator"]
