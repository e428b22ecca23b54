from pydantic import BaseModel


class PrivacyWarningDTO(BaseModel):
    show: bool
    is_tor_browser: bool
    title: str
    warning: str
    recommendations_title: str
    recommendations: list[str] = []
    guide_url: str
    guide_button: str
    accept_button: str
