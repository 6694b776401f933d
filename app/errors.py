"""Service-layer failures surfaced to the client as ``{"detail": message}``."""


class AttendanceError(Exception):
    status_code = 400
    message = "Request could not be completed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# Location
class LocationServicesDisabled(AttendanceError):
    status_code = 403
    message = "Location services are disabled. Please enable the services."


class LocationPermissionDenied(AttendanceError):
    status_code = 403
    message = "Location permission denied."


class LocationPermissionDeniedForever(AttendanceError):
    status_code = 403
    message = "Location permission denied forever, we cannot access."


class LocationUnavailable(AttendanceError):
    status_code = 400
    message = "Location not available"


# Face check
class FaceDetectionError(AttendanceError):
    status_code = 422
    message = "Error processing face detection"


class NoFaceDetected(AttendanceError):
    status_code = 422
    message = "No face detected. Please ensure your face is clearly visible in good lighting"


# Submission / history
class IncompleteSubmission(AttendanceError):
    status_code = 400
    message = "Please complete all fields before submitting!"


class SubmissionFailed(AttendanceError):
    status_code = 502
    message = "Failed to submit attendance"


class SelfieStorageFailed(AttendanceError):
    status_code = 502
    message = "Failed to store selfie"


class SessionNotFound(AttendanceError):
    status_code = 404
    message = "Check-in session not found"


class SessionAlreadySubmitted(AttendanceError):
    status_code = 409
    message = "Attendance for this check-in was already submitted"


class RecordNotFound(AttendanceError):
    status_code = 404
    message = "Attendance record not found"
