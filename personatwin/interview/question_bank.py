"""
Interview question catalog.

The questions are layered: icebreakers first, then situational, humor,
philosophy, small talk and finally emotional intelligence.
"""
from typing import List, Optional

from .models import Question, QuestionCategory, PersonalityDimension as D, PersonalityMarker as M
from ..config import ACTIVE_QUESTION_COUNT


ALL_QUESTIONS: List[Question] = [
    # Layer 1: Baseline communication (icebreakers)
    Question(
        id=1,
        category=QuestionCategory.ICEBREAKER,
        prompt="So tell me, what's been making you laugh lately? Could be anything - a show, something that happened, whatever",
        follow_ups={
            "show": "Oh nice! What kind of humor does it have?",
            "friend": "Your friends sound fun! Are you usually the one making jokes or laughing at them?",
            "work": "Finding humor at work is a skill! Are you the office comedian?",
            "nothing": "One of those weeks huh? What usually cracks you up when nothing else does?",
        },
        analysis_weights={D.HUMOR: 0.8, D.EMOTIONAL_EXPRESSION: 0.5, D.OPENNESS: 0.6},
        response_patterns={
            "haha": M(D.HUMOR, 0.7, "expressive_laughter"),
            "lol": M(D.HUMOR, 0.5, "casual_laughter"),
            "honestly": M(D.OPENNESS, 0.6, "authentic_sharing"),
        },
    ),
    Question(
        id=2,
        category=QuestionCategory.ICEBREAKER,
        prompt="What's been on your mind lately? Like, what keeps popping into your head when you have a quiet moment?",
        follow_ups={
            "future": "Planning ahead or just daydreaming?",
            "stress": "That sounds heavy. How do you usually deal with stuff like this?",
            "excited": "That's awesome! Are you someone who plans everything out or just wings it?",
            "money": "Ah the universal concern. Are you a saver or more of a 'life is short' type?",
        },
        analysis_weights={D.ANALYTICAL_THINKING: 0.7, D.OPTIMISM: 0.6, D.OPENNESS: 0.5},
        response_patterns={
            "worried": M(D.OPTIMISM, -0.5, "anxiety_expression"),
            "excited": M(D.OPTIMISM, 0.8, "enthusiasm"),
            "thinking": M(D.ANALYTICAL_THINKING, 0.7, "contemplative"),
        },
    ),
    # Layer 2: Situational responses
    Question(
        id=3,
        category=QuestionCategory.SITUATIONAL,
        prompt="Okay, scenario time: Your best friend just told you they got their dream job, but it means they're moving across the country. What's the first thing that comes out of your mouth?",
        follow_ups={
            "happy": "That's sweet! Are you usually the supportive friend even when it's hard?",
            "sad": "Honest reaction! Do you usually wear your heart on your sleeve?",
            "joke": "Humor as a coping mechanism or just your natural response?",
            "practical": "The logical friend! Is that your role in the group?",
        },
        analysis_weights={D.EMPATHY: 0.9, D.EMOTIONAL_EXPRESSION: 0.7, D.ASSERTIVENESS: 0.4},
        response_patterns={
            "congrat": M(D.EMPATHY, 0.8, "other_focused"),
            "miss": M(D.EMOTIONAL_EXPRESSION, 0.8, "vulnerable"),
            "visit": M(D.OPTIMISM, 0.6, "solution_oriented"),
        },
    ),
    Question(
        id=4,
        category=QuestionCategory.SITUATIONAL,
        prompt="Someone cuts you off in traffic, then gives you the apologetic wave. Your internal monologue is saying...?",
        follow_ups={
            "angry": "Fair! Does it take you a while to cool down or are you over it quickly?",
            "fine": "The zen master! Natural temperament or years of practice?",
            "depends": "What makes the difference for you?",
            "wave": "Killing them with kindness! Is that your usual approach?",
        },
        analysis_weights={D.CONFLICT_STYLE: 0.8, D.ASSERTIVENESS: 0.6, D.EMOTIONAL_EXPRESSION: 0.5},
        response_patterns={
            "whatever": M(D.CONFLICT_STYLE, 0.3, "avoidant"),
            "asshole": M(D.ASSERTIVENESS, 0.7, "direct"),
            "happens": M(D.EMPATHY, 0.7, "understanding"),
        },
    ),
    # Layer 3: Humor and creativity
    Question(
        id=5,
        category=QuestionCategory.HUMOR,
        prompt="Complete this: The most ridiculous thing about modern life is...",
        follow_ups={
            "phone": "The classic! Are you good at unplugging or totally addicted?",
            "social": "The social media paradox! Are you a poster or a lurker?",
            "work": "The grind culture got you? What's your ideal work-life balance?",
            "dating": "The apps are wild! Got any horror stories or success stories?",
        },
        analysis_weights={D.HUMOR: 0.7, D.ANALYTICAL_THINKING: 0.6, D.OPENNESS: 0.5},
        response_patterns={
            "literally": M(D.HUMOR, 0.4, "emphatic"),
            "stupid": M(D.ASSERTIVENESS, 0.6, "blunt"),
            "funny": M(D.HUMOR, 0.7, "observational"),
        },
    ),
    Question(
        id=6,
        category=QuestionCategory.HUMOR,
        prompt="Would you rather fight 100 duck-sized horses or 1 horse-sized duck? And please, I need your battle strategy here",
        follow_ups={
            "duck": "Bold choice! Are you usually a 'go big or go home' person?",
            "horses": "Playing the odds! Are you typically the strategic planner?",
            "neither": "The pacifist! But seriously, if you HAD to choose?",
            "weapon": "Already thinking tactics! Do you approach most problems this analytically?",
        },
        analysis_weights={D.HUMOR: 0.8, D.SPONTANEITY: 0.6, D.ANALYTICAL_THINKING: 0.5},
        response_patterns={
            "obviously": M(D.ASSERTIVENESS, 0.6, "confident"),
            "terrifying": M(D.HUMOR, 0.6, "dramatic"),
            "strategy": M(D.ANALYTICAL_THINKING, 0.8, "methodical"),
        },
    ),
    # Layer 4: Values and philosophy
    Question(
        id=7,
        category=QuestionCategory.PHILOSOPHICAL,
        prompt="If you could change one unwritten social rule that everyone just accepts, what would it be?",
        follow_ups={
            "small talk": "The introvert's dream! What would you replace it with?",
            "emotion": "Breaking down walls! Are you pretty open with your feelings?",
            "success": "Redefining the game! What does success mean to you?",
            "polite": "Keeping it real! Are you usually the most honest person in the room?",
        },
        analysis_weights={D.OPENNESS: 0.8, D.ANALYTICAL_THINKING: 0.7, D.ASSERTIVENESS: 0.5},
        response_patterns={
            "should": M(D.ASSERTIVENESS, 0.7, "prescriptive"),
            "weird": M(D.OPENNESS, 0.6, "questioning_norms"),
            "society": M(D.ANALYTICAL_THINKING, 0.7, "systemic_thinking"),
        },
    ),
    Question(
        id=8,
        category=QuestionCategory.PHILOSOPHICAL,
        prompt="What's something you believe that most people would disagree with? Don't worry, this is a judgment-free zone",
        follow_ups={
            "actually": "Interesting perspective! How did you come to that conclusion?",
            "unpopular": "Brave of you to say! Do you usually go against the grain?",
            "think": "I can see that! Are you often the devil's advocate in discussions?",
            "probably": "Playing it safe or genuinely moderate views?",
        },
        analysis_weights={D.OPENNESS: 0.9, D.ASSERTIVENESS: 0.7, D.ANALYTICAL_THINKING: 0.6},
        response_patterns={
            "everyone": M(D.ASSERTIVENESS, 0.5, "generalizing"),
            "personally": M(D.OPENNESS, 0.7, "personal_stance"),
            "evidence": M(D.ANALYTICAL_THINKING, 0.8, "fact_based"),
        },
    ),
    # Layer 5: Small talk and daily life
    Question(
        id=9,
        category=QuestionCategory.SMALL_TALK,
        prompt="Someone asks 'How was your weekend?' but they actually want to know. What's your real answer?",
        follow_ups={
            "nothing": "The art of doing nothing! Is that rare for you?",
            "busy": "The hustler! Do you ever actually relax?",
            "friends": "Social butterfly! Are you the planner or do you just show up?",
            "netflix": "The homebody! What's your latest obsession?",
        },
        analysis_weights={D.SOCIAL_ENERGY: 0.8, D.SPONTANEITY: 0.5, D.OPENNESS: 0.6},
        response_patterns={
            "honestly": M(D.OPENNESS, 0.8, "authentic"),
            "actually": M(D.ASSERTIVENESS, 0.5, "elaborating"),
            "just": M(D.DETAIL_ORIENTATION, -0.5, "minimizing"),
        },
    ),
    # Layer 6: Emotional intelligence
    Question(
        id=10,
        category=QuestionCategory.EMOTIONAL,
        prompt="Your friend is venting about the same problem for the 10th time. What's going through your head vs what you actually say?",
        follow_ups={
            "listen": "The patient saint! Does this come naturally or is it effort?",
            "advice": "The fixer! Do people come to you for solutions often?",
            "frustrated": "The honest reaction! How do you handle repetitive situations?",
            "relate": "The empathizer! Are you usually the one people confide in?",
        },
        analysis_weights={D.EMPATHY: 0.9, D.EMOTIONAL_EXPRESSION: 0.6, D.ASSERTIVENESS: 0.5},
        response_patterns={
            "again": M(D.EMPATHY, -0.3, "frustrated"),
            "understand": M(D.EMPATHY, 0.8, "supportive"),
            "but": M(D.ASSERTIVENESS, 0.6, "redirecting"),
        },
    ),
]


class QuestionBank:
    """Read-only access to the question catalog."""

    def __init__(self,
                 questions: Optional[List[Question]] = None,
                 active_question_count: int = ACTIVE_QUESTION_COUNT):
        self._questions = list(questions if questions is not None else ALL_QUESTIONS)
        if not self._questions:
            raise ValueError("Question catalog is empty")
        # Clamp so a session always has at least one question
        self.active_question_count = max(1, min(active_question_count, len(self._questions)))

    def all_questions(self) -> List[Question]:
        """The full hand-authored catalog in interview order."""
        return list(self._questions)

    def active_questions(self) -> List[Question]:
        """The configured prefix of the catalog used for a session."""
        return self._questions[:self.active_question_count]

    def get_question(self, question_id: int) -> Optional[Question]:
        for question in self.active_questions():
            if question.id == question_id:
                return question
        return None

    def questions_by_category(self, category: QuestionCategory) -> List[Question]:
        return [q for q in self.active_questions() if q.category == category]

    @staticmethod
    def follow_up(response: str, question: Question) -> Optional[str]:
        """
        Find the follow-up triggered by an answer.

        Args:
            response: Raw answer text
            question: Question the answer belongs to

        Returns:
            The first follow-up whose keyword appears in the answer
            (case-insensitive), or None
        """
        lowered = response.lower()
        for keyword, follow_up in question.follow_ups.items():
            if keyword in lowered:
                return follow_up
        return None
