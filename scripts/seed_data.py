"""Script to seed reference content into the database.

Seeds checklist categories and items, learning modules with lessons,
discussion prompts and the resource library. Tables that already hold
content are left untouched, so the script can be run more than once.

Usage:
    python -m scripts.seed_data
"""

import asyncio

import structlog
from sqlalchemy import func, select

from components.checklist.models import ChecklistCategory, ChecklistItem
from components.core.init_db import db_manager, get_db
from components.core.log import configure_logging
from components.discussions.models import DiscussionPrompt
from components.modules.models import Lesson, Module
from components.resources.models import Resource

logger = structlog.get_logger(__name__)

# slug, name, description, icon, items: (title, description, is_required)
CHECKLIST = [
    ("spiritual", "Spiritual Preparation", "Strengthen your faith and Islamic foundation", "🤲", [
        ("Complete Islamic Marriage Course", "Take a pre-marriage course from qualified scholars to understand Islamic marriage principles", True),
        ("Study Rights & Responsibilities", "Learn about the rights and responsibilities of spouses in Islam from authentic sources", True),
        ("Discuss Religious Practice Level", "Openly discuss your levels of prayer, fasting, hijab, and other religious observances", True),
        ("Learn Marriage Duas", "Memorize important duas for marriage, including the wedding night dua", False),
        ("Seek Family Blessings", "Get parental approval and blessings from both families", True),
        ("Perform Istikhara Prayer", "Pray Salat al-Istikhara seeking Allah's guidance before proceeding", True),
    ]),
    ("financial", "Financial Planning", "Ensure financial clarity and agreements", "💰", [
        ("Agree on Mahr Amount", "Discuss and finalize the mahr amount with transparency and fairness", True),
        ("Disclose Financial Situation", "Share complete information about income, debts, savings, and financial obligations", True),
        ("Create Wedding Budget", "Plan a realistic budget for the wedding ceremony that honors Islamic simplicity", True),
        ("Discuss Financial Goals", "Align on saving, investing, spending habits, and long-term financial objectives", True),
        ("Plan Living Arrangements", "Decide on housing situation, location, and whether to rent or buy", True),
        ("Set Up Banking Arrangements", "Decide on joint accounts, separate accounts, or a combination approach", False),
        ("Clarify Financial Responsibilities", "Discuss who will pay for what and how household expenses will be managed", True),
    ]),
    ("family", "Family & Relationships", "Build healthy family dynamics", "👨‍👩‍👧", [
        ("Meet Both Families", "Ensure both families have met, connected, and built a relationship", True),
        ("Discuss In-Law Boundaries", "Establish healthy boundaries with extended family while maintaining Islamic respect", True),
        ("Plan Family Visit Frequency", "Agree on how often you'll visit both families and expectations around holidays", False),
        ("Discuss Children Timeline", "Talk openly about when or if you want to have children", True),
        ("Align on Parenting Values", "Discuss parenting styles, discipline approaches, and children's education plans", True),
        ("Address Cultural Differences", "Navigate any cultural or family tradition differences with wisdom and compromise", False),
    ]),
    ("personal", "Personal Development", "Grow individually for a stronger partnership", "🌱", [
        ("Complete Health Check-Up", "Get a comprehensive pre-marital health screening and share results honestly", True),
        ("Discuss Communication Styles", "Learn each other's communication preferences and how you express emotions", True),
        ("Identify Conflict Resolution Strategy", "Agree on Islamic principles for handling disagreements and seeking mediation", True),
        ("Share Personal Goals", "Discuss individual aspirations, dreams, and how you'll support each other", True),
        ("Discuss Lifestyle Preferences", "Talk about daily routines, hobbies, social life, and personal habits", False),
        ("Learn Love Languages", "Understand how you each prefer to give and receive love and affection", False),
    ]),
    ("future", "Future Planning", "Discuss and align on future goals", "🎯", [
        ("Discuss Career Ambitions", "Share professional goals and the support you'll need from each other", True),
        ("Plan Living Location", "Decide where you want to live long-term and factors that might require relocation", True),
        ("Align on Work-Life Balance", "Discuss expectations about working outside the home for both spouses", True),
        ("Set 5-Year Goals", "Create a shared vision for the next 5 years of your marriage", False),
        ("Discuss Further Education", "Talk about plans for pursuing additional education or certifications", False),
        ("Plan for Emergencies", "Discuss life insurance, wills, emergency funds, and estate planning", False),
    ]),
]

# slug, title, description, icon, minutes, lessons: (title, content)
MODULES = [
    ("foundations", "Islamic Marriage Foundations", "Learn the rights, responsibilities, and beauty of marriage in Islam", "📖", 30, [
        ("The Purpose of Marriage in Islam", "Marriage completes half of the deen and is built on tranquility, affection and mercy (Quran 30:21)."),
        ("Rights of the Wife", "Mahr, financial maintenance, kind treatment, and respect for her personal wealth."),
        ("Rights of the Husband", "Mutual respect, consultation in household matters, and trust in his leadership role."),
        ("The Wedding (Nikah) Process", "The wali, two witnesses, the agreed mahr, offer and acceptance, and the walimah."),
        ("Prophetic Guidance on Marriage", "How the Prophet ﷺ showed kindness, patience and good humour with his family."),
    ]),
    ("communication", "Communication & Conflict Resolution", "Master healthy communication patterns for a harmonious marriage", "💬", 25, [
        ("Active Listening Skills", "Listen to understand, not to reply. Reflect back what you heard before responding."),
        ("Speaking with Kindness", "Choose gentle words and timing; avoid criticism, contempt and sarcasm."),
        ("Handling Disagreements Islamically", "Pause when angry, seek wudu, and involve trusted mediators when needed (Quran 4:35)."),
        ("Non-Verbal Communication", "Tone, eye contact and small gestures carry as much meaning as words."),
    ]),
    ("intimacy", "Intimacy & Emotional Connection", "Build deep emotional and physical intimacy the Islamic way", "❤️", 25, [
        ("Islamic Perspective on Intimacy", "Intimacy within marriage is an act of worship and a right of both spouses."),
        ("Building Emotional Intimacy", "Share feelings, fears and hopes regularly and make time for each other."),
        ("Building Trust & Vulnerability", "Keep each other's secrets and respond to openness with care."),
        ("Maintaining Romance & Affection", "Small daily gestures, gifts and kind words keep affection alive."),
    ]),
    ("financial", "Financial Harmony in Marriage", "Manage money together with wisdom and Islamic principles", "💵", 20, [
        ("Islamic Financial Obligations", "The husband's duty of nafaqah, the wife's ownership of her wealth, and zakat."),
        ("Budgeting as a Couple", "Track income and expenses together and agree on monthly limits."),
        ("Avoiding Financial Conflicts", "Be transparent about debts and spending and decide big purchases together."),
        ("Halal Wealth Building", "Avoid riba, save consistently and invest in permissible ventures."),
    ]),
    ("family", "Navigating Family & In-Laws", "Build healthy relationships while maintaining boundaries", "👪", 20, [
        ("Honoring Parents After Marriage", "Birr al-walidayn continues after marriage alongside duties to your spouse."),
        ("Setting Healthy Boundaries", "Agree on privacy, visits and decision-making before problems arise."),
        ("Managing Family Expectations", "Communicate plans early and respectfully to both families."),
        ("Presenting a United Front", "Resolve disagreements privately and support each other in public."),
    ]),
]

# category, title, description, questions, tips
PROMPTS = [
    ("values", "Core Islamic Values",
     "Discuss your understanding and practice of Islam to ensure alignment on what matters most",
     ["How important is Islam in your daily life?",
      "What does practicing Islam look like for you (prayer, fasting, modesty, etc.)?",
      "How do you want to raise children Islamically?",
      "What role should the Quran and Sunnah play in our marriage and decision-making?"],
     "Be honest about your current practice level, not just your ideals."),
    ("values", "Life Priorities & Goals",
     "Understand what matters most to each of you and ensure compatibility",
     ["What are your top 3 priorities in life right now?",
      "How do you balance deen, family, career, and personal growth?",
      "What are your non-negotiables in life?"],
     "Listen without judgment. Priorities may differ slightly but should be compatible."),
    ("family", "In-Law Relationships & Boundaries",
     "Set expectations about family involvement and boundaries from the start",
     ["How close are you to your family? How often do you currently see them?",
      "What level of involvement do you expect from in-laws in our marriage?",
      "How will we handle family requests for money or time?"],
     "In-law issues are a major source of marital conflict. Be proactive in discussing expectations."),
    ("family", "Children & Parenting Philosophy",
     "Align on whether, when and how to raise children",
     ["Do you want children, and how many?",
      "How soon after marriage would you like to have children?",
      "What parenting style do you hope to follow?"],
     "Talk about timing and values, not just numbers."),
    ("lifestyle", "Daily Life & Routines",
     "Picture an ordinary week together",
     ["What does a typical day look like for you?",
      "How should household chores be shared?",
      "How much time alone do you need?"],
     "Small habits add up; discuss them before they become friction."),
    ("finances", "Money Management & Financial Philosophy",
     "Understand each other's relationship with money",
     ["Are you a saver or a spender?",
      "Should we have joint or separate accounts?",
      "How will we make large purchases?"],
     "Share numbers openly; financial secrecy erodes trust."),
    ("finances", "Mahr & Wedding Budget",
     "Agree on the mahr and a wedding that fits your means",
     ["What mahr feels fair and meaningful to both of us?",
      "Will the mahr be paid in full at the nikah or partly deferred?",
      "What is a realistic wedding budget, and who contributes?"],
     "Simplicity in the wedding is encouraged; avoid starting marriage in debt."),
    ("communication", "Conflict Resolution Strategy",
     "Decide how you will disagree well",
     ["How do you usually react when upset?",
      "What helps you calm down during an argument?",
      "Who could we ask to mediate if we get stuck?"],
     "Agree on a pause signal and a rule to never go to bed angry without a plan to resolve."),
    ("faith", "Spiritual Connection & Growth",
     "Plan how to grow in faith together",
     ["Would you like to pray together regularly?",
      "How can we support each other's spiritual goals?"],
     "Start small: one shared act of worship each week."),
    ("goals", "Career & Educational Aspirations",
     "Support each other's professional and academic plans",
     ["What are your career goals for the next five years?",
      "Do you plan further study?",
      "How would we handle a relocation for work?"],
     "Discuss how ambitions fit with family plans."),
]

# title, description, type, category, url, author, is_featured
RESOURCES = [
    ("Before You Tie The Knot",
     "Comprehensive Islamic guide on marriage preparation covering rights, responsibilities, and realistic expectations",
     "pdf", "Islamic Guidance", "https://muslimmarriageguide.com/before-you-tie-the-knot/", "Sheikh Mufti Menk", True),
    ("Rights & Responsibilities in Marriage - Yaqeen Institute",
     "Detailed scholarly article on spousal rights according to Quran and Sunnah with contemporary applications",
     "article", "Islamic Guidance", "https://yaqeeninstitute.org/read/paper/the-islamic-marriage-contract", "Dr. Hatem al-Haj", True),
    ("Marriage in Islam: Comprehensive Course",
     "Full online course covering all aspects of Islamic marriage from qualified scholars",
     "link", "Islamic Guidance", "https://seekersguidance.org/courses/marriage-in-islam/", "SeekersGuidance", True),
    ("The 5 Love Languages",
     "Learn how you and your spouse give and receive love differently through five distinct languages",
     "link", "Communication", "https://www.5lovelanguages.com/", "Dr. Gary Chapman", True),
    ("Active Listening in Marriage: A Practical Guide",
     "Practical techniques for listening to your spouse with empathy",
     "article", "Communication", None, None, False),
    ("Halal Money Management for Newlyweds",
     "Budgeting, saving and avoiding interest as a new Muslim couple",
     "article", "Financial Planning", None, None, False),
    ("Zakat Calculator & Financial Purification",
     "Work out zakat on savings, gold and investments",
     "link", "Financial Planning", None, None, False),
    ("How to Perform Salat al-Istikhara",
     "Step-by-step guide to the prayer for guidance with the full dua",
     "article", "Duas & Spiritual", None, None, True),
    ("The Seven Principles for Making Marriage Work",
     "Research-based principles for a lasting marriage",
     "link", "Recommended Books", None, "Dr. John Gottman", False),
]


async def _is_empty(db, model) -> bool:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one() == 0


async def seed_data():
    """Seed reference content into the database."""
    await db_manager.create_tables()

    async for db in get_db():
        if await _is_empty(db, ChecklistCategory):
            for position, (slug, name, description, icon, items) in enumerate(CHECKLIST, start=1):
                db.add(ChecklistCategory(
                    slug=slug,
                    name=name,
                    description=description,
                    icon=icon,
                    sort_order=position,
                    items=[
                        ChecklistItem(title=title, description=text, is_required=required, sort_order=order)
                        for order, (title, text, required) in enumerate(items, start=1)
                    ],
                ))
            await db.commit()
            logger.info("seeded", table="checklist_items", rows=sum(len(c[4]) for c in CHECKLIST))

        if await _is_empty(db, Module):
            for position, (slug, title, description, icon, minutes, lessons) in enumerate(MODULES, start=1):
                db.add(Module(
                    slug=slug,
                    title=title,
                    description=description,
                    icon=icon,
                    estimated_duration=minutes,
                    sort_order=position,
                    is_published=True,
                    lessons=[
                        Lesson(title=lesson_title, content=content, sort_order=order)
                        for order, (lesson_title, content) in enumerate(lessons, start=1)
                    ],
                ))
            await db.commit()
            logger.info("seeded", table="modules", rows=len(MODULES))

        if await _is_empty(db, DiscussionPrompt):
            for position, (category, title, description, questions, tips) in enumerate(PROMPTS, start=1):
                db.add(DiscussionPrompt(
                    category=category,
                    title=title,
                    description=description,
                    questions=questions,
                    tips=tips,
                    sort_order=position,
                ))
            await db.commit()
            logger.info("seeded", table="discussion_prompts", rows=len(PROMPTS))

        if await _is_empty(db, Resource):
            for title, description, resource_type, category, url, author, featured in RESOURCES:
                db.add(Resource(
                    title=title,
                    description=description,
                    type=resource_type,
                    category=category,
                    url=url,
                    author=author,
                    is_featured=featured,
                ))
            await db.commit()
            logger.info("seeded", table="resources", rows=len(RESOURCES))

    await db_manager.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed_data())
