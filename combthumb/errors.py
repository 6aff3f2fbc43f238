from __future__ import annotations


class ProcessingError(Exception):
    """Base class for failures raised while building a combined thumbnail."""


class EmptyImageArray(ProcessingError):
    def __init__(self) -> None:
        super().__init__("Image array is empty")


class TooManyImages(ProcessingError):
    def __init__(self) -> None:
        super().__init__("Image array has too many images, maximum is 4")


class CouldNotFindMostPixels(ProcessingError):
    def __init__(self) -> None:
        super().__init__(
            "Could not find image with most pixels, array is likely empty"
        )


class EncodingError(ProcessingError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Image encoding error: {cause}")
        self.cause = cause
