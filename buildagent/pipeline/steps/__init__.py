from .checkout_step import SourceFetchStep
from .revision_step import RevisionAlignStep
from .login_step import RegistryAuthenticateStep
from .build_step import ImageBuildStep
from .push_step import ImagePushStep

__all__ = [
    "SourceFetchStep",
    "RevisionAlignStep",
    "RegistryAuthenticateStep",
    "ImageBuildStep",
    "ImagePushStep",
]
