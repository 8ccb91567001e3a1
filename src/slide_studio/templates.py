"""
Static XML for the base package: theme, slide master, layout skeleton and the
small presentation-level parts. Only plain markup lives here; base.py fills in
the parts that vary (layouts, slide list, ids).
"""

from .constants import SLIDE_HEIGHT_16_9, SLIDE_WIDTH_16_9

NSDECLS = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main"'
)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'


# Layout number -> (ST_SlideLayoutType, placeholders). Geometry is in EMU on a
# 4:3 (9144000 wide) slide; base.py scales x/cx to the 16:9 slide width.
LAYOUTS = {
    1: ('title', [
        dict(type='ctrTitle', x=685800, y=2130425, cx=7772400, cy=1470025),
        dict(type='subTitle', x=1371600, y=3886200, cx=6400800, cy=1752600, idx=1),
    ]),
    2: ('obj', [
        dict(type='title', x=457200, y=274638, cx=8229600, cy=1143000),
        dict(type='body', x=457200, y=1600200, cx=8229600, cy=4525963, idx=1),
    ]),
    3: ('secHead', [
        dict(type='title', x=722313, y=4406900, cx=7772400, cy=1362075),
        dict(type='body', x=722313, y=2906713, cx=7772400, cy=1500187, idx=1),
    ]),
    4: ('twoObj', [
        dict(type='title', x=457200, y=274638, cx=8229600, cy=1143000),
        dict(type='body', x=457200, y=1600200, cx=4038600, cy=4525963, idx=1),
        dict(type='body', x=4648200, y=1600200, cx=4038600, cy=4525963, idx=2),
    ]),
    5: ('twoTxTwoObj', [
        dict(type='title', x=457200, y=274638, cx=8229600, cy=1143000),
        dict(type='body', x=457200, y=1535113, cx=4040188, cy=639762, idx=1),
        dict(type='body', x=457200, y=2174875, cx=4040188, cy=3951288, idx=2),
        dict(type='body', x=4645025, y=1535113, cx=4041775, cy=639762, idx=3),
        dict(type='body', x=4645025, y=2174875, cx=4041775, cy=3951288, idx=4),
    ]),
    6: ('titleOnly', [
        dict(type='title', x=457200, y=274638, cx=8229600, cy=1143000),
    ]),
    7: ('blank', []),
    8: ('objTx', [
        dict(type='title', x=457200, y=273050, cx=3008313, cy=1162050),
        dict(type='body', x=3575050, y=273050, cx=5111750, cy=5853113, idx=1),
        dict(type='body', x=457200, y=1435100, cx=3008313, cy=4691063, idx=2),
    ]),
    9: ('picTx', [
        dict(type='title', x=1792288, y=4800600, cx=5486400, cy=566738),
        dict(type='body', x=1792288, y=5367338, cx=5486400, cy=804862, idx=1),
        dict(type='pic', x=1792288, y=612775, cx=5486400, cy=4114800, idx=2),
    ]),
    10: ('vertTx', [
        dict(type='title', x=457200, y=274638, cx=8229600, cy=1143000),
        dict(type='body', x=457200, y=1600200, cx=8229600, cy=4525963, idx=1, vert=True),
    ]),
    11: ('vertTitleAndTx', [
        dict(type='title', x=6629400, y=274638, cx=2057400, cy=5851525, vert=True),
        dict(type='body', x=457200, y=274638, cx=6019800, cy=5851525, idx=1, vert=True),
    ]),
}

SP_TREE_HEAD = (
    '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
    '<p:grpSpPr><a:xfrm><a:off x="0" y="0"/><a:ext cx="0" cy="0"/>'
    '<a:chOff x="0" y="0"/><a:chExt cx="0" cy="0"/></a:xfrm></p:grpSpPr>'
)

PRESENTATION_XML = (
    f'<p:presentation {NSDECLS} saveSubsetFonts="1">'
    '<p:sldMasterIdLst/>'
    '<p:sldIdLst/>'
    f'<p:sldSz cx="{SLIDE_WIDTH_16_9}" cy="{SLIDE_HEIGHT_16_9}"/>'
    '<p:notesSz cx="6858000" cy="9144000"/>'
    '</p:presentation>'
)

PRES_PROPS_XML = f'<p:presentationPr {NSDECLS}/>'

VIEW_PROPS_XML = (
    f'<p:viewPr {NSDECLS}>'
    '<p:normalViewPr><p:restoredLeft sz="15620"/><p:restoredTop sz="94660"/></p:normalViewPr>'
    '<p:slideViewPr><p:cSldViewPr><p:cViewPr varScale="1">'
    '<p:scale><a:sx n="68" d="100"/><a:sy n="68" d="100"/></p:scale><p:origin x="-1392" y="-96"/>'
    '</p:cViewPr><p:guideLst><p:guide orient="horz" pos="2160"/><p:guide pos="2880"/></p:guideLst>'
    '</p:cSldViewPr></p:slideViewPr>'
    '<p:notesTextViewPr><p:cViewPr>'
    '<p:scale><a:sx n="100" d="100"/><a:sy n="100" d="100"/></p:scale><p:origin x="0" y="0"/>'
    '</p:cViewPr></p:notesTextViewPr>'
    '<p:gridSpacing cx="72008" cy="72008"/>'
    '</p:viewPr>'
)

TABLE_STYLES_XML = (
    '<a:tblStyleLst xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'def="{5C22544A-7EE6-4342-B048-85BDC9FD1C3A}"/>'
)

THEME_XML = (
    '<a:theme xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" name="Office Theme">'
    '<a:themeElements>'
    '<a:clrScheme name="Office">'
    '<a:dk1><a:sysClr val="windowText" lastClr="000000"/></a:dk1>'
    '<a:lt1><a:sysClr val="window" lastClr="FFFFFF"/></a:lt1>'
    '<a:dk2><a:srgbClr val="44546A"/></a:dk2>'
    '<a:lt2><a:srgbClr val="E7E6E6"/></a:lt2>'
    '<a:accent1><a:srgbClr val="4472C4"/></a:accent1>'
    '<a:accent2><a:srgbClr val="ED7D31"/></a:accent2>'
    '<a:accent3><a:srgbClr val="A5A5A5"/></a:accent3>'
    '<a:accent4><a:srgbClr val="FFC000"/></a:accent4>'
    '<a:accent5><a:srgbClr val="5B9BD5"/></a:accent5>'
    '<a:accent6><a:srgbClr val="70AD47"/></a:accent6>'
    '<a:hlink><a:srgbClr val="0563C1"/></a:hlink>'
    '<a:folHlink><a:srgbClr val="954F72"/></a:folHlink>'
    '</a:clrScheme>'
    '<a:fontScheme name="Office">'
    '<a:majorFont><a:latin typeface="Calibri Light"/><a:ea typeface=""/><a:cs typeface=""/></a:majorFont>'
    '<a:minorFont><a:latin typeface="Calibri"/><a:ea typeface=""/><a:cs typeface=""/></a:minorFont>'
    '</a:fontScheme>'
    '<a:fmtScheme name="Office">'
    '<a:fillStyleLst>'
    '<a:solidFill><a:schemeClr val="phClr"/></a:solidFill>'
    '<a:gradFill rotWithShape="1"><a:gsLst>'
    '<a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="50000"/><a:satMod val="300000"/></a:schemeClr></a:gs>'
    '<a:gs pos="35000"><a:schemeClr val="phClr"><a:tint val="37000"/><a:satMod val="300000"/></a:schemeClr></a:gs>'
    '<a:gs pos="100000"><a:schemeClr val="phClr"><a:tint val="15000"/><a:satMod val="350000"/></a:schemeClr></a:gs>'
    '</a:gsLst><a:lin ang="16200000" scaled="1"/></a:gradFill>'
    '<a:gradFill rotWithShape="1"><a:gsLst>'
    '<a:gs pos="0"><a:schemeClr val="phClr"><a:shade val="51000"/><a:satMod val="130000"/></a:schemeClr></a:gs>'
    '<a:gs pos="80000"><a:schemeClr val="phClr"><a:shade val="93000"/><a:satMod val="130000"/></a:schemeClr></a:gs>'
    '<a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="94000"/><a:satMod val="135000"/></a:schemeClr></a:gs>'
    '</a:gsLst><a:lin ang="16200000" scaled="0"/></a:gradFill>'
    '</a:fillStyleLst>'
    '<a:lnStyleLst>'
    '<a:ln w="6350" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill>'
    '<a:prstDash val="solid"/><a:miter lim="800000"/></a:ln>'
    '<a:ln w="12700" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill>'
    '<a:prstDash val="solid"/><a:miter lim="800000"/></a:ln>'
    '<a:ln w="19050" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"/></a:solidFill>'
    '<a:prstDash val="solid"/><a:miter lim="800000"/></a:ln>'
    '</a:lnStyleLst>'
    '<a:effectStyleLst>'
    '<a:effectStyle><a:effectLst/></a:effectStyle>'
    '<a:effectStyle><a:effectLst/></a:effectStyle>'
    '<a:effectStyle><a:effectLst><a:outerShdw blurRad="57150" dist="19050" dir="5400000" algn="ctr" '
    'rotWithShape="0"><a:srgbClr val="000000"><a:alpha val="63000"/></a:srgbClr></a:outerShdw>'
    '</a:effectLst></a:effectStyle>'
    '</a:effectStyleLst>'
    '<a:bgFillStyleLst>'
    '<a:solidFill><a:schemeClr val="phClr"/></a:solidFill>'
    '<a:solidFill><a:schemeClr val="phClr"><a:tint val="95000"/><a:satMod val="170000"/></a:schemeClr></a:solidFill>'
    '<a:gradFill rotWithShape="1"><a:gsLst>'
    '<a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="93000"/><a:satMod val="150000"/>'
    '<a:shade val="98000"/><a:lumMod val="102000"/></a:schemeClr></a:gs>'
    '<a:gs pos="50000"><a:schemeClr val="phClr"><a:tint val="98000"/><a:satMod val="130000"/>'
    '<a:shade val="90000"/><a:lumMod val="103000"/></a:schemeClr></a:gs>'
    '<a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="63000"/><a:satMod val="120000"/></a:schemeClr></a:gs>'
    '</a:gsLst><a:lin ang="5400000" scaled="0"/></a:gradFill>'
    '</a:bgFillStyleLst>'
    '</a:fmtScheme>'
    '</a:themeElements>'
    '<a:objectDefaults/>'
    '<a:extraClrSchemeLst/>'
    '</a:theme>'
)


def _body_level(level, mar_l, indent, char, size):
    return (
        f'<a:lvl{level}pPr marL="{mar_l}" indent="{indent}" algn="l" defTabSz="914400" rtl="0" '
        'eaLnBrk="1" latinLnBrk="0" hangingPunct="1">'
        '<a:spcBef><a:spcPct val="20000"/></a:spcBef>'
        f'<a:buFont typeface="Arial"/><a:buChar char="{char}"/>'
        f'<a:defRPr sz="{size}" kern="1200"><a:solidFill><a:schemeClr val="tx1"/></a:solidFill>'
        '<a:latin typeface="+mn-lt"/><a:ea typeface="+mn-ea"/><a:cs typeface="+mn-cs"/></a:defRPr>'
        f'</a:lvl{level}pPr>'
    )


SLIDE_MASTER_XML = (
    f'<p:sldMaster {NSDECLS}>'
    '<p:cSld>'
    '<p:bg><p:bgRef idx="1001"><a:schemeClr val="bg1"/></p:bgRef></p:bg>'
    f'<p:spTree>{SP_TREE_HEAD}</p:spTree>'
    '</p:cSld>'
    '<p:clrMap bg1="lt1" tx1="dk1" bg2="lt2" tx2="dk2" accent1="accent1" accent2="accent2" '
    'accent3="accent3" accent4="accent4" accent5="accent5" accent6="accent6" hlink="hlink" '
    'folHlink="folHlink"/>'
    '<p:sldLayoutIdLst/>'
    '<p:txStyles>'
    '<p:titleStyle>'
    '<a:lvl1pPr algn="ctr" defTabSz="914400" rtl="0" eaLnBrk="1" latinLnBrk="0" hangingPunct="1">'
    '<a:spcBef><a:spcPct val="0"/></a:spcBef><a:buNone/>'
    '<a:defRPr sz="4400" kern="1200"><a:solidFill><a:schemeClr val="tx1"/></a:solidFill>'
    '<a:latin typeface="+mj-lt"/><a:ea typeface="+mj-ea"/><a:cs typeface="+mj-cs"/></a:defRPr>'
    '</a:lvl1pPr>'
    '</p:titleStyle>'
    '<p:bodyStyle>'
    + _body_level(1, 342900, -342900, '•', 3200)
    + _body_level(2, 742950, -285750, '–', 2800)
    + _body_level(3, 1143000, -228600, '•', 2400)
    + _body_level(4, 1600200, -228600, '–', 2000)
    + _body_level(5, 2057400, -228600, '»', 2000)
    + '</p:bodyStyle>'
    '<p:otherStyle><a:defPPr><a:defRPr lang="en-US"/></a:defPPr></p:otherStyle>'
    '</p:txStyles>'
    '</p:sldMaster>'
)

SLIDE_LAYOUT_XML = (
    f'<p:sldLayout {NSDECLS} preserve="1">'
    f'<p:cSld><p:spTree>{SP_TREE_HEAD}</p:spTree></p:cSld>'
    '<p:clrMapOvr><a:masterClrMapping/></p:clrMapOvr>'
    '</p:sldLayout>'
)

# Filled with str.format: id, x, y, cx, cy
LAYOUT_PLACEHOLDER_XML = (
    f'<p:sp {NSDECLS}>'
    '<p:nvSpPr><p:cNvPr id="{id}" name=""/>'
    '<p:cNvSpPr><a:spLocks noGrp="1"/></p:cNvSpPr>'
    '<p:nvPr><p:ph/></p:nvPr></p:nvSpPr>'
    '<p:spPr>'
    '<a:xfrm><a:off x="{x}" y="{y}"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm>'
    '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
    '</p:spPr>'
    '<p:txBody><a:bodyPr/><a:lstStyle/><a:p><a:endParaRPr lang="en-US"/></a:p></p:txBody>'
    '</p:sp>'
)

CORE_PROPS_XML = (
    '<cp:coreProperties '
    'xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties" '
    'xmlns:dc="http://purl.org/dc/elements/1.1/" '
    'xmlns:dcterms="http://purl.org/dc/terms/" '
    'xmlns:dcmitype="http://purl.org/dc/dcmitype/" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
    '<dc:title>Presentation</dc:title>'
    '<dc:creator>slide-studio</dc:creator>'
    '<dcterms:created xsi:type="dcterms:W3CDTF">{now}</dcterms:created>'
    '<dcterms:modified xsi:type="dcterms:W3CDTF">{now}</dcterms:modified>'
    '</cp:coreProperties>'
)

APP_PROPS_XML = (
    '<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties" '
    'xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes">'
    '<TotalTime>0</TotalTime>'
    '<Words>0</Words>'
    '<Application>slide-studio</Application>'
    '<PresentationFormat>Widescreen</PresentationFormat>'
    '<Paragraphs>0</Paragraphs>'
    '<Slides>1</Slides>'
    '<Notes>0</Notes>'
    '<HiddenSlides>0</HiddenSlides>'
    '<MMClips>0</MMClips>'
    '<ScaleCrop>false</ScaleCrop>'
    '<LinksUpToDate>false</LinksUpToDate>'
    '<SharedDoc>false</SharedDoc>'
    '<HyperlinksChanged>false</HyperlinksChanged>'
    '<AppVersion>16.0000</AppVersion>'
    '</Properties>'
)
