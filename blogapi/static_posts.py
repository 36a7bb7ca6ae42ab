"""
Long-form articles bundled with the application.

These never touch the database. `StaticContentProvider` serves them and
`PostService.import_static_posts` can copy them into the store.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class StaticPost:
    """A bundled article with no lifecycle. Always visible."""
    slug: str
    title: str
    date: str  # YYYY-MM-DD
    snippet: str
    author: str
    read_time: int
    content: str
    tags: List[str] = field(default_factory=list)
    featured_image: Optional[str] = None


STATIC_POSTS: List[StaticPost] = [
    StaticPost(
        slug="7-rc-tips-rules",
        title="7 Tips for Dealing with the Hardest LSAT Reading Comp Questions",
        date="2025-06-08",
        snippet=(
            "Breaking down 7 concrete rules for tackling the toughest LSAT Reading "
            "Comprehension questions, with examples from a real test."
        ),
        tags=["reading-comprehension", "strategy", "lsat-prep", "rules"],
        author="Germaine Washington",
        read_time=6,
        content="""
<p>Logical Reasoning lends itself to rule-making more easily, but plenty of rules apply to Reading Comprehension too. These came out of one tough passage, and they are meant to be broadly useful.</p>
<h2>1. Main Idea Question Approach</h2>
<p>On harder main idea questions, use a two-pass elimination: first remove anything not found in the passage, then pick the remaining choice that covers the broadest scope.</p>
<h2>2. Difficult Analogy Questions</h2>
<p>Test in both directions. Convert the passage's situation into a general structure and eliminate mismatches, then take a tempting answer and ask whether you would have written this passage to illustrate it.</p>
<h2>3. LEAST / EXCEPT Questions</h2>
<p>Scan for a "silver bullet" answer that directly contradicts the stem before auditing the other four.</p>
<h2>4. Meaning in Context</h2>
<p>Pre-phrase the word's function from the nearby contrast before reading the choices.</p>
<h2>5. Concept Application</h2>
<p>Compress the concept into one abstract rule and trust it.</p>
<h2>6. Author Agreement</h2>
<p>Demand a quote or a clean inference anchor.</p>
<h2>7. Paragraph Purpose</h2>
<p>Identify the paragraph's job in the whole passage. Ask what the passage would lose without it.</p>
""",
    ),
    StaticPost(
        slug="score-improvement-timeline",
        title="How to Train Yourself to Hit -0 on LR and RC (from a 180 Scorer)",
        date="2025-06-05",
        snippet=(
            "An intensive, step-by-step review process used by a 180 scorer to "
            "eliminate recurring errors and master the LSAT."
        ),
        tags=["lsat-prep", "logical-reasoning", "reading-comprehension", "strategy", "180-scorer"],
        author="Germaine Washington",
        read_time=12,
        content="""
<p>The two questions I hear most from high scorers are how to stop the same mistakes from coming back, and what to do when fixing one mistake creates another. They share an answer.</p>
<blockquote><strong>WARNING:</strong> This is not the fastest way to improve. It is the most complete method I know for students aiming at the top tier.</blockquote>
<h2>The Core Cycle</h2>
<h3>Step 1: Take a Full-Length Timed Practice Test</h3>
<p>Save your timed answers without checking them, then take a real break.</p>
<h3>Step 2: The Complete Blind Review</h3>
<p>For every question, write out what the stem asks, what the stimulus argues, why the correct answer is right and why every other answer is wrong.</p>
<h3>Step 3: Turn Misses Into Rules</h3>
<p>Each error becomes a concrete rule you can apply next time.</p>
""",
    ),
    StaticPost(
        slug="weaken-question-strategy",
        title="You Know Weakeners Should Hurt the Conclusion… But How?",
        date="2025-06-01",
        snippet=(
            "A 4-part framework for how weakeners work: premise vs. non-premise, "
            "attack vs. alternative, so you can pre-phrase and narrow answers on hard questions."
        ),
        tags=["logical-reasoning", "weaken", "lsat-prep"],
        author="Germaine Washington",
        read_time=8,
        content="""
<p>Ask most students what a weakener does and you will hear "hurt the conclusion." Ask how, and the room goes quiet.</p>
<h2>The Fix: A 4-Part Framework</h2>
<ul>
<li>Your Evidence Isn't Strong (Premise – Attack)</li>
<li>Your Evidence Fits Another Conclusion (Premise – Alternative)</li>
<li>New Info Hurts Your Conclusion (Non-Premise – Attack)</li>
<li>New Info Suggests a Different Conclusion (Non-Premise – Alternative)</li>
</ul>
<h2>Embracing the Overlap</h2>
<p>LSAT categories overlap all the time. The goal is a reliable framework to fall back on when the test gets hard.</p>
""",
    ),
    StaticPost(
        slug="mastering-logical-reasoning",
        title="The #1 Worst Lie I See Students Tell Themselves (View of a 180 Scorer)",
        date="2025-05-27",
        snippet=(
            "A 180 scorer's take on why blaming the test for ambiguity is the biggest "
            "mistake you can make, and how to fix your process."
        ),
        tags=["mindset", "lsat-prep", "logical-reasoning", "motivation"],
        author="Germaine Washington",
        read_time=5,
        content="""
<p>Far too often I see students say some questions are just ambiguous and there is nothing to be done about it.</p>
<h2>Nonsense</h2>
<p>Every LSAT question has exactly one defensible answer. Take an untimed section, record yourself talking through each question, and convert every error into a concrete rule for next time.</p>
""",
    ),
]


def get_static_post(slug: str, posts: Optional[List[StaticPost]] = None) -> Optional[StaticPost]:
    """Look up a bundled article by slug, in `posts` or the default bundle."""
    for post in STATIC_POSTS if posts is None else posts:
        if post.slug == slug:
            return post
    return None
