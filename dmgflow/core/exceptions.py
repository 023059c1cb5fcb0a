"""
Exception classes for dmgflow.

This module defines custom exceptions raised while building a disk image.
"""

from typing import List, Optional

class DMGFlowError(Exception):
    """
    Base exception class for all dmgflow errors.
    
    All custom exceptions in the library should inherit from this class.
    """
    pass

class ConfigError(DMGFlowError):
    """Exception raised when a build settings file cannot be used."""
    pass

class ValidationError(DMGFlowError):
    """Exception raised when input validation fails."""
    pass

class BundleNotFoundError(ValidationError):
    """Exception raised when the application bundle does not exist."""
    
    def __init__(self, bundle_path: str):
        super().__init__(f".app file not found at {bundle_path}")
        self.bundle_path = bundle_path

class PathResolutionError(DMGFlowError):
    """Exception raised when a path cannot be made absolute."""
    pass

class ResourceError(DMGFlowError):
    """Exception raised when a temporary resource cannot be created."""
    pass

class SymlinkError(DMGFlowError):
    """Exception raised when the Applications shortcut cannot be created."""
    pass

class CleanupError(DMGFlowError):
    """Exception raised when the intermediate image cannot be deleted."""
    pass

class ToolError(DMGFlowError):
    """Exception raised when an external tool fails."""
    
    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
    ):
        """
        Initialize a ToolError.
        
        Args:
            message: Error message
            step: Pipeline step that ran the tool (optional)
            command: Command line that failed (optional)
            returncode: Exit status of the tool, None if it never started
        """
        super().__init__(message)
        self.step = step
        self.command = command or []
        self.returncode = returncode
