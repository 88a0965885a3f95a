"""Visual theme constants and global stylesheet."""

BG_PRIMARY = "#2f3033"
BG_CARD = "#3a3c41"
BORDER = "#4d5057"
ACCENT = "#1ac135"
ACCENT_INFO = "#00aeef"
TEXT_PRIMARY = "#ffffff"
TEXT_DIM = "#787c7f"
ERROR = "#ff4444"

# Split view proportions, as fractions of the window width
REDUCED_INFOS_WIDTH = 0.362
PROMO_PANEL_WIDTH = 0.638

GLOBAL_STYLESHEET = """
QWidget {
    background-color: #2f3033;
    color: #ffffff;
    font-family: "Source Sans Pro", "Noto Sans", "DejaVu Sans", sans-serif;
    font-size: 14px;
}

QPushButton {
    background-color: #3a3c41;
    border: 1px solid #4d5057;
    border-radius: 20px;
    padding: 10px 24px;
    color: #ffffff;
    font-size: 15px;
}

QPushButton:hover {
    background-color: #4d5057;
}

QPushButton:disabled {
    background-color: #3a3c41;
    color: #787c7f;
}

QPushButton#primaryButton {
    background-color: #00aeef;
    border: none;
    color: white;
    font-weight: bold;
}

QPushButton#primaryButton:hover {
    background-color: #0096cf;
}

QPushButton#primaryButton:disabled {
    background-color: #2a5568;
    color: #787c7f;
}

QPushButton#iconButton {
    background: transparent;
    border: none;
    padding: 4px 8px;
    font-size: 18px;
}

QProgressBar {
    border: none;
    border-radius: 20px;
    text-align: center;
    background-color: #3a3c41;
    min-height: 40px;
}

QProgressBar::chunk {
    background-color: #1ac135;
    border-radius: 20px;
}

QLabel#logo {
    font-size: 20px;
    font-weight: bold;
    color: white;
}

QLabel#stepTitle {
    font-size: 16px;
    font-weight: bold;
}

QLabel#stepDetail {
    color: #787c7f;
    font-size: 13px;
}

QFrame#analyticsAlert {
    background-color: #3a3c41;
    border-radius: 6px;
}

QFrame#analyticsAlert QLabel {
    background: transparent;
    font-size: 12px;
}

QFrame#reducedInfos {
    background-color: #2f3033;
}

QLabel#finishTitle {
    font-size: 24px;
    font-weight: bold;
}
"""
