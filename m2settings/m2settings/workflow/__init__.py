from .download import DownloadOptions, DownloadWorkflow, State, unwrap_cause

__all__ = ["DownloadOptions", "DownloadWorkflow", "State", "unwrap_cause"]
