"""Recognition patterns shared by the job and resume extractors.

Everything here is data. Each tuple is a priority list: extractors try the
entries in order and the first one that matches wins, partial matches from
different entries are never merged.
"""

import re

# Section header synonyms

# Longer synonyms come first so "任职要求" anchors before the bare "要求".
REQUIREMENTS_HEADERS = ("任职要求", "岗位要求", "职位要求", "任职资格", "要求", "条件", "Requirements", "Qualifications")
RESPONSIBILITIES_HEADERS = ("工作职责", "岗位职责", "职责", "工作内容", "Responsibilities")

# Job article table. Labels other than requirements/responsibilities are only
# tracked so that they terminate the sections before them.
JOB_SECTION_HEADERS: dict[str, tuple[str, ...]] = {
    "requirements": REQUIREMENTS_HEADERS,
    "responsibilities": RESPONSIBILITIES_HEADERS,
    "salary": ("薪资", "薪酬", "待遇"),
    "benefits": ("福利",),
    "contact": ("联系", "投递", "简历", "报名"),
    "location": ("工作地",),
    "company": ("公司介绍", "关于我们"),
}

RESUME_SECTION_HEADERS: dict[str, tuple[str, ...]] = {
    "education": ("教育背景", "教育经历", "教育", "学历", "Education"),
    "experience": ("工作经历", "工作经验", "工作背景", "实习经历", "实习经验", "工作", "Experience"),
    "skills": ("专业技能", "个人技能", "技能", "技术栈", "Skills"),
    "projects": ("项目经历", "项目经验", "项目", "Projects"),
    "summary": ("自我评价", "个人简介", "个人总结", "自我介绍", "Summary"),
}

# Contact patterns

STRICT_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

AT_MARKER = r"(?:\[at\]|\(at\)|（at）|【at】)"
DOT_MARKER = r"(?:\[dot\]|\(dot\)|（dot）|【dot】)"

# Escalating tolerance: plain address, spaced/full-width separators,
# bracketed at/dot markers used to dodge scrapers.
EMAIL_PATTERNS = (
    STRICT_EMAIL,
    re.compile(r"[a-zA-Z0-9._%+-]+\s*[@＠]\s*[a-zA-Z0-9.-]+\s*[.．]\s*[a-zA-Z]{2,}"),
    re.compile(
        rf"[a-zA-Z0-9._%+-]+\s*{AT_MARKER}\s*[a-zA-Z0-9-]+"
        rf"(?:\s*(?:{DOT_MARKER}|\.)\s*[a-zA-Z0-9-]+)*"
        rf"\s*{DOT_MARKER}\s*[a-zA-Z]{{2,}}",
        re.IGNORECASE,
    ),
)

# Replacements applied in order when cleaning a matched address
EMAIL_NORMALIZATIONS = (
    (re.compile(r"\s+"), ""),
    (re.compile("＠"), "@"),
    (re.compile("．"), "."),
    (re.compile(AT_MARKER, re.IGNORECASE), "@"),
    (re.compile(DOT_MARKER, re.IGNORECASE), "."),
)

MOBILE_PHONE = re.compile(r"1[3-9]\d{9}")

CONTACT_NAME_PATTERNS = (
    re.compile(r"(?:联系人|负责人)[：:\s]*([^\n]+)"),
    re.compile(r"(?<![A-Za-z])HR\s*[：:]\s*([^\n]+)", re.IGNORECASE),
)

# Job field patterns

SALARY_PATTERNS = (
    re.compile(r"(?:薪[资酬]|待遇|月薪|年薪)[：:\s]*([^\n]+)"),
    re.compile(r"(\d+[kK]\s*[-~～]\s*\d+[kK])"),
    re.compile(r"(\d+(?:\.\d+)?万?\s*[-~～]\s*\d+(?:\.\d+)?万)"),
)

LOCATION_PATTERNS = (
    re.compile(r"(?:工作地[点址]|地[点址]|坐标)[：:\s]*([^\n]+)"),
    re.compile(r"(?:base|Base|BASE)[：:\s]*([^\n]+)"),
)

DEPARTMENT_PATTERN = re.compile(r"(?:部门|团队|事业部)[：:\s]*([^\n]+)")

# A line announcing one opening, e.g. "招聘：后端工程师" or "岗位名称：产品经理"
POSTING_CUE = re.compile(r"(?:招聘|诚聘|岗位(?:名称)?)(?:[ \t]*[：:]|[ \t]+)[ \t]*([^\n]+)")

# Page-level title cues, tried after the posting cue
TITLE_PATTERNS = (
    POSTING_CUE,
    re.compile(r"(?:急招|热招)[：:\s]*([^\n]+)"),
    re.compile(r"(?:职位|岗位)(?:名称)?[：:]\s*([^\n]+)"),
    re.compile(r"【([^】\n]+)】"),
)

COMPANY_PATTERNS = (
    re.compile(r"(?:公司|企业|集团|机构)(?:名称)?[：:]\s*([^\n]+)"),
    re.compile(r"(?:关于|about)\s*([^\n]+)", re.IGNORECASE),
)

# Window taken after the last posting cue of an article
POSTING_BLOCK_WINDOW = 2000

# Items shorter than this after marker stripping are noise
MIN_LIST_ITEM_LENGTH = 3
