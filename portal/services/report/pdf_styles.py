from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet

HEADER_COLOR = colors.HexColor('#001c80')
GRID_COLOR = colors.HexColor('#dde3e8')

_CACHED_STYLES = None


def get_styles():
    global _CACHED_STYLES
    if _CACHED_STYLES is None:
        styles = getSampleStyleSheet()
        styles.add(ParagraphStyle(
            name='CenteredTitle',
            fontSize=18, leading=20,
            alignment=TA_CENTER,
            textColor=HEADER_COLOR,
            fontName='Helvetica-Bold',
            spaceAfter=12
        ))
        styles.add(ParagraphStyle(
            name='InfoValue', fontSize=10, leading=12,
            alignment=TA_CENTER,
            textColor=colors.HexColor('#666666'),
            fontName='Helvetica'
        ))
        styles.add(ParagraphStyle(
            name='TableHeader', fontSize=10, leading=12,
            alignment=TA_CENTER,
            textColor=colors.white,
            fontName='Helvetica-Bold'
        ))
        styles.add(ParagraphStyle(
            name='TableBodyLeft', fontSize=9, leading=11,
            alignment=TA_LEFT,
            textColor=colors.black,
            fontName='Helvetica'
        ))
        _CACHED_STYLES = styles
    return _CACHED_STYLES
