"""
Core Module - Generation Lifecycle
==================================

Modules:
    constants: Fixed configuration, OracleConfig and environment Settings
    prompts: Prompt texts and size-bounded prompt assembly
    submitter: RequestSubmitter, creates one generation job
    polling: PollingOrchestrator, JobStatus and the backoff schedule
    extraction: Ordered strategies that find answer text in a payload
    retry: RetryPolicy, budget escalation across attempts
    oracle: OracleService, the call boundary used by the MCP tool and the CLI
"""
