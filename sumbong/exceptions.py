class SumbongError(Exception):
    """Base exception for the incident map engine"""
    pass
class ReportSourceError(SumbongError):
    """Error raised when a report source cannot deliver its collection"""
    pass
