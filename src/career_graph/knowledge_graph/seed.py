"""Reference data for the career graph and the loader that writes it.

All writes are MERGE-based UNWIND batches, so seeding twice is harmless.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .store import GraphStore

logger = logging.getLogger(__name__)

PERSONALITY_TYPES: list[dict[str, Any]] = [
    {"code": "INTJ", "name": "建筑师", "nickname": "独立思考者", "description": "富有想象力和战略性的思考者，一切都在计划之中", "category": "analyst"},
    {"code": "INTP", "name": "逻辑学家", "nickname": "客观分析者", "description": "具有创造力的发明家，对知识有着止不住的渴望", "category": "analyst"},
    {"code": "ENTJ", "name": "指挥官", "nickname": "果断领导者", "description": "大胆、富有想象力且意志强大的领导者", "category": "analyst"},
    {"code": "ENTP", "name": "辩论家", "nickname": "创新探索者", "description": "聪明好奇的思想家，不会放过任何智力挑战", "category": "analyst"},
    {"code": "INFJ", "name": "提倡者", "nickname": "理想主义者", "description": "安静而神秘，同时鼓舞人心且不知疲倦的理想主义者", "category": "diplomat"},
    {"code": "INFP", "name": "调停者", "nickname": "理想主义者", "description": "诗意、善良的利他主义者，总是热心地为正义事业提供帮助", "category": "diplomat"},
    {"code": "ENFJ", "name": "主人公", "nickname": "魅力领袖", "description": "富有魅力且鼓舞人心的领导者，能够吸引听众", "category": "diplomat"},
    {"code": "ENFP", "name": "竞选者", "nickname": "热情创意者", "description": "热情、有创造力且社交能力强的自由精神", "category": "diplomat"},
    {"code": "ISTJ", "name": "物流师", "nickname": "责任担当者", "description": "实际且注重事实的个人，可靠性不容怀疑", "category": "sentinel"},
    {"code": "ISFJ", "name": "守卫者", "nickname": "温暖守护者", "description": "非常专注且温暖的保护者，时刻准备着保护爱着的人", "category": "sentinel"},
    {"code": "ESTJ", "name": "总经理", "nickname": "高效管理者", "description": "出色的管理者，在管理事情或人方面无与伦比", "category": "sentinel"},
    {"code": "ESFJ", "name": "执政官", "nickname": "热心助人者", "description": "极有同情心、爱交际、受欢迎的人，总是热心地提供帮助", "category": "sentinel"},
    {"code": "ISTP", "name": "鉴赏家", "nickname": "灵活实干家", "description": "大胆而实际的实验家，掌握各种工具", "category": "explorer"},
    {"code": "ISFP", "name": "探险家", "nickname": "艺术创作者", "description": "灵活有魅力的艺术家，时刻准备着探索和体验新事物", "category": "explorer"},
    {"code": "ESTP", "name": "企业家", "nickname": "活力行动派", "description": "聪明、精力充沛、善于感知的人，真正享受生活在边缘", "category": "explorer"},
    {"code": "ESFP", "name": "表演者", "nickname": "活力四射者", "description": "自发的、精力充沛的和热情的表演者", "category": "explorer"},
]

SKILLS: list[dict[str, Any]] = [
    {"id": "python", "name": "Python", "category": "programming", "level": "beginner", "description": "AI/ML 首选编程语言"},
    {"id": "pytorch", "name": "PyTorch", "category": "programming", "level": "intermediate", "description": "深度学习框架"},
    {"id": "tensorflow", "name": "TensorFlow", "category": "programming", "level": "intermediate", "description": "深度学习框架"},
    {"id": "sql", "name": "SQL", "category": "programming", "level": "beginner", "description": "数据库查询语言"},
    {"id": "linear-algebra", "name": "线性代数", "category": "math", "level": "intermediate", "description": "矩阵运算、向量空间"},
    {"id": "probability", "name": "概率论与统计", "category": "math", "level": "intermediate", "description": "概率分布、假设检验"},
    {"id": "calculus", "name": "微积分", "category": "math", "level": "intermediate", "description": "导数、积分、优化"},
    {"id": "ml-basics", "name": "机器学习基础", "category": "ml", "level": "beginner", "description": "监督/无监督学习、模型评估"},
    {"id": "deep-learning", "name": "深度学习", "category": "ml", "level": "intermediate", "description": "神经网络、CNN、RNN"},
    {"id": "nlp", "name": "自然语言处理", "category": "ml", "level": "advanced", "description": "文本处理、Transformer、LLM"},
    {"id": "cv", "name": "计算机视觉", "category": "ml", "level": "advanced", "description": "图像处理、目标检测、分割"},
    {"id": "reinforcement-learning", "name": "强化学习", "category": "ml", "level": "advanced", "description": "策略学习、Q-learning"},
    {"id": "data-analysis", "name": "数据分析", "category": "data", "level": "beginner", "description": "数据清洗、探索性分析"},
    {"id": "data-visualization", "name": "数据可视化", "category": "data", "level": "beginner", "description": "图表制作、Dashboard"},
    {"id": "feature-engineering", "name": "特征工程", "category": "data", "level": "intermediate", "description": "特征提取、转换、选择"},
    {"id": "communication", "name": "沟通能力", "category": "soft", "level": "beginner", "description": "技术表达、团队协作"},
    {"id": "problem-solving", "name": "问题解决", "category": "soft", "level": "intermediate", "description": "分析问题、设计方案"},
    {"id": "project-management", "name": "项目管理", "category": "soft", "level": "intermediate", "description": "计划、执行、监控"},
]

CAREERS: list[dict[str, Any]] = [
    {"id": "ai-researcher", "name": "AI 研究员", "description": "探索前沿算法和深度学习模型，推动人工智能理论发展", "icon": "🔬", "category": "research", "salaryRange": "¥30k-80k/月", "demandLevel": "high", "growthPotential": 9},
    {"id": "ml-engineer", "name": "AI 算法工程师", "description": "设计和优化机器学习模型，解决实际业务问题", "icon": "⚙️", "category": "engineering", "salaryRange": "¥25k-60k/月", "demandLevel": "high", "growthPotential": 8},
    {"id": "nlp-engineer", "name": "NLP 工程师", "description": "开发自然语言处理系统，实现语音识别、机器翻译等功能", "icon": "💬", "category": "engineering", "salaryRange": "¥28k-65k/月", "demandLevel": "high", "growthPotential": 9},
    {"id": "cv-engineer", "name": "计算机视觉工程师", "description": "开发图像识别、物体检测等视觉系统", "icon": "👁️", "category": "engineering", "salaryRange": "¥27k-62k/月", "demandLevel": "high", "growthPotential": 8},
    {"id": "ai-pm", "name": "AI 产品经理", "description": "定义 AI 产品方向，连接技术和用户需求", "icon": "📊", "category": "product", "salaryRange": "¥20k-50k/月", "demandLevel": "medium", "growthPotential": 7},
    {"id": "data-scientist", "name": "数据科学家", "description": "分析大数据，挖掘数据价值，构建预测模型", "icon": "📈", "category": "engineering", "salaryRange": "¥22k-55k/月", "demandLevel": "high", "growthPotential": 8},
    {"id": "ai-designer", "name": "AI 交互设计师", "description": "设计 AI 产品的用户界面和交互体验", "icon": "🎨", "category": "design", "salaryRange": "¥18k-45k/月", "demandLevel": "medium", "growthPotential": 7},
]

COURSES: list[dict[str, Any]] = [
    {"id": "python-basics", "name": "Python 编程基础", "description": "零基础入门 Python，掌握编程思维", "provider": "Coursera", "duration": "40小时", "difficulty": "beginner", "rating": 4.8, "url": "https://coursera.org"},
    {"id": "math-for-ml", "name": "机器学习数学基础", "description": "线性代数、概率论、微积分核心知识", "provider": "Khan Academy", "duration": "60小时", "difficulty": "intermediate", "rating": 4.7, "url": "https://khanacademy.org"},
    {"id": "ml-coursera", "name": "机器学习 (Andrew Ng)", "description": "斯坦福大学经典机器学习课程", "provider": "Coursera", "duration": "60小时", "difficulty": "intermediate", "rating": 4.9, "url": "https://coursera.org/learn/machine-learning"},
    {"id": "deep-learning-ai", "name": "深度学习专项课程", "description": "系统学习神经网络和深度学习", "provider": "DeepLearning.AI", "duration": "80小时", "difficulty": "intermediate", "rating": 4.8, "url": "https://deeplearning.ai"},
    {"id": "pytorch-course", "name": "PyTorch 深度学习实战", "description": "使用 PyTorch 构建神经网络", "provider": "Fast.ai", "duration": "50小时", "difficulty": "intermediate", "rating": 4.7, "url": "https://fast.ai"},
    {"id": "nlp-stanford", "name": "NLP 入门到精通", "description": "自然语言处理核心技术和应用", "provider": "Stanford Online", "duration": "70小时", "difficulty": "advanced", "rating": 4.6, "url": "https://stanford.edu"},
    {"id": "cv-course", "name": "计算机视觉实战", "description": "图像处理、目标检测、图像分割", "provider": "Udacity", "duration": "60小时", "difficulty": "advanced", "rating": 4.5, "url": "https://udacity.com"},
    {"id": "llm-course", "name": "大语言模型原理与应用", "description": "理解 Transformer、GPT、LLM 微调", "provider": "Hugging Face", "duration": "40小时", "difficulty": "advanced", "rating": 4.8, "url": "https://huggingface.co/learn"},
    {"id": "data-analysis-course", "name": "数据分析实战", "description": "Pandas、NumPy、数据可视化", "provider": "DataCamp", "duration": "30小时", "difficulty": "beginner", "rating": 4.6, "url": "https://datacamp.com"},
    {"id": "sql-course", "name": "SQL 数据库入门", "description": "掌握 SQL 查询和数据库操作", "provider": "Codecademy", "duration": "20小时", "difficulty": "beginner", "rating": 4.5, "url": "https://codecademy.com"},
]

LEARNING_PATHS: list[dict[str, Any]] = [
    {"id": "ml-engineer-path", "name": "AI 算法工程师学习路径", "description": "从零基础到掌握机器学习核心技能", "targetCareer": "ml-engineer", "estimatedDuration": "6-12个月"},
    {"id": "nlp-engineer-path", "name": "NLP 工程师学习路径", "description": "成为自然语言处理专家", "targetCareer": "nlp-engineer", "estimatedDuration": "8-14个月"},
    {"id": "data-scientist-path", "name": "数据科学家学习路径", "description": "掌握数据分析和机器学习", "targetCareer": "data-scientist", "estimatedDuration": "6-10个月"},
]

CAREER_PERSONALITIES: dict[str, list[str]] = {
    "ai-researcher": ["INTJ", "INTP"],
    "ml-engineer": ["INTJ", "INTP", "ENTJ", "ISTP"],
    "nlp-engineer": ["INTJ", "INTP", "ENTP"],
    "cv-engineer": ["INTJ", "INTP", "ISTP"],
    "ai-pm": ["ENTJ", "ENTP", "ENFJ", "ESTJ"],
    "data-scientist": ["INTP", "INTJ", "ENTJ", "ISTJ"],
    "ai-designer": ["ENFP", "INFP", "ISFP", "ESFP"],
}

CAREER_SKILLS: dict[str, list[str]] = {
    "ai-researcher": ["python", "pytorch", "deep-learning", "linear-algebra", "probability", "calculus"],
    "ml-engineer": ["python", "pytorch", "tensorflow", "ml-basics", "deep-learning", "feature-engineering"],
    "nlp-engineer": ["python", "pytorch", "nlp", "deep-learning"],
    "cv-engineer": ["python", "pytorch", "cv", "deep-learning"],
    "ai-pm": ["ml-basics", "communication", "project-management", "problem-solving"],
    "data-scientist": ["python", "sql", "ml-basics", "data-analysis", "data-visualization", "probability"],
    "ai-designer": ["communication", "problem-solving"],
}

COURSE_SKILLS: dict[str, list[str]] = {
    "python-basics": ["python"],
    "math-for-ml": ["linear-algebra", "probability", "calculus"],
    "ml-coursera": ["ml-basics", "python"],
    "deep-learning-ai": ["deep-learning", "pytorch", "tensorflow"],
    "pytorch-course": ["pytorch", "deep-learning"],
    "nlp-stanford": ["nlp", "deep-learning"],
    "cv-course": ["cv", "deep-learning"],
    "llm-course": ["nlp", "deep-learning"],
    "data-analysis-course": ["data-analysis", "data-visualization", "python"],
    "sql-course": ["sql"],
}

PATH_COURSES: dict[str, list[str]] = {
    "ml-engineer-path": ["python-basics", "math-for-ml", "ml-coursera", "deep-learning-ai", "pytorch-course"],
    "nlp-engineer-path": ["python-basics", "math-for-ml", "ml-coursera", "deep-learning-ai", "nlp-stanford", "llm-course"],
    "data-scientist-path": ["python-basics", "sql-course", "data-analysis-course", "math-for-ml", "ml-coursera"],
}

_NODE_STATEMENTS: list[tuple[str, str, list[dict[str, Any]]]] = [
    ("personality_types", "UNWIND $rows AS row MERGE (n:PersonalityType {code: row.code}) SET n += row", PERSONALITY_TYPES),
    ("skills", "UNWIND $rows AS row MERGE (n:Skill {id: row.id}) SET n += row", SKILLS),
    ("careers", "UNWIND $rows AS row MERGE (n:Career {id: row.id}) SET n += row", CAREERS),
    ("courses", "UNWIND $rows AS row MERGE (n:Course {id: row.id}) SET n += row", COURSES),
    (
        "learning_paths",
        """
        UNWIND $rows AS row
        MERGE (n:LearningPath {id: row.id})
        SET n.name = row.name, n.description = row.description, n.estimatedDuration = row.estimatedDuration
        WITH n, row
        MATCH (c:Career {id: row.targetCareer})
        MERGE (n)-[:TARGETS]->(c)
        """,
        LEARNING_PATHS,
    ),
]

# Relationship types cannot be parameterized; one statement per type.
_REL_STATEMENTS: dict[str, str] = {
    "SUITS": """
        UNWIND $rows AS row
        MATCH (a:Career {id: row.src}) MATCH (b:PersonalityType {code: row.dst})
        MERGE (a)-[:SUITS]->(b)
    """,
    "REQUIRES": """
        UNWIND $rows AS row
        MATCH (a:Career {id: row.src}) MATCH (b:Skill {id: row.dst})
        MERGE (a)-[:REQUIRES]->(b)
    """,
    "TEACHES": """
        UNWIND $rows AS row
        MATCH (a:Course {id: row.src}) MATCH (b:Skill {id: row.dst})
        MERGE (a)-[:TEACHES]->(b)
    """,
    "INCLUDES": """
        UNWIND $rows AS row
        MATCH (a:LearningPath {id: row.src}) MATCH (b:Course {id: row.dst})
        MERGE (a)-[r:INCLUDES]->(b)
        SET r.order = row.order
    """,
}


def batched(it: Iterable, batch_size: int) -> Iterable[list]:
    batch: list = []
    for x in it:
        batch.append(x)
        if len(batch) >= batch_size:
            yield batch
            batch = []
    if batch:
        yield batch


def _pairs(mapping: dict[str, list[str]], *, ordered: bool = False) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for src, dsts in mapping.items():
        for i, dst in enumerate(dsts):
            row: dict[str, Any] = {"src": src, "dst": dst}
            if ordered:
                row["order"] = i + 1
            rows.append(row)
    return rows


def relation_rows() -> dict[str, list[dict[str, Any]]]:
    return {
        "SUITS": _pairs(CAREER_PERSONALITIES),
        "REQUIRES": _pairs(CAREER_SKILLS),
        "TEACHES": _pairs(COURSE_SKILLS),
        "INCLUDES": _pairs(PATH_COURSES, ordered=True),
    }


async def seed(store: GraphStore, *, reset: bool = False, batch_size: int = 500) -> dict[str, int]:
    """Write the reference data; returns the number of rows written per kind."""
    await store.ensure_schema()
    if reset:
        logger.warning("reset requested: deleting every node")
        await store.run_query("MATCH (n) DETACH DELETE n")

    counts: dict[str, int] = {}
    for name, cypher, rows in _NODE_STATEMENTS:
        for batch in batched(rows, batch_size):
            await store.run_query(cypher, {"rows": batch})
        counts[name] = len(rows)
        logger.info("seeded %d %s", len(rows), name)

    for rel_type, rows in relation_rows().items():
        for batch in batched(rows, batch_size):
            await store.run_query(_REL_STATEMENTS[rel_type], {"rows": batch})
        counts[rel_type] = len(rows)
        logger.info("seeded %d %s relations", len(rows), rel_type)

    return counts
