"""Sample blog posts loaded into a fresh content store."""

from datetime import datetime

SEED_AUTHOR = "Alex Nkusi Shyaka"

SEED_POSTS = [
    {
        "id": "1",
        "title": "Building Market-Ready Tech Skills for African Graduates",
        "slug": "building-market-ready-tech-skills-african-graduates",
        "content": """# Building Market-Ready Tech Skills for African Graduates

CodeImpact is in the business of delivering market-ready tech skills for job-seeking graduates in the age range of 18-35.

## How do we plan to achieve this?

We run cohort-based training programs that typically last 4-6 months, with the aim of helping cohort graduates land a job in the tech space locally and internationally.

The Andela developer landscape survey 2020 found that **70 percent of African software engineers work remotely**. Working remotely removes the geographical barrier to work and releases previously unavailable opportunities.

## Our secret sauce

Our team has built engineering teams for **Andela**, **OutBox**, **Stutern**, **Talent Centric**, and **KanzuCode**, and has run boot camps and technical curricula for companies that train and hire software engineers.

## Clear outcomes

The outcome we judge ourselves on is simple: cohort graduates leave with the skills the tech job market demands and the mentorship needed to secure a role. Placement partners like **Waape** take learners into internships and full-time positions.""",
        "excerpt": "How CodeImpact delivers market-ready tech skills through cohort-based training programs, aiming to bridge the skills gap for African graduates in the tech space.",
        "featured_image": "https://images.unsplash.com/photo-1522202176988-66273c2fd55f?ixlib=rb-4.0.3&auto=format&fit=crop&w=500&h=300",
        "tags": ["EdTech", "African Tech", "Community Building", "Skills Development"],
        "published": True,
        "created_at": datetime(2024, 1, 15),
        "metadata": {"read_time": 5, "views": 850, "author": SEED_AUTHOR},
    },
    {
        "id": "2",
        "title": "Our Learning Journey: Building Future Tech Leaders",
        "slug": "our-learning-journey-building-future-tech-leaders",
        "content": """# Our Learning Journey: Building Future Tech Leaders

Our learning journey is core to our teens coding program and we constantly tweak and improve it.

## The Two-Week Introduction

We kick off with a **free two week program** that introduces learners to critical thinking and problem solving using visual programming tools.

## The 8-Week Core Program

The core program focuses on front end web technologies like **HTML** and **CSS**.

## JavaScript: Bringing Applications to Life

The last phase focuses on **JavaScript**, the de-facto language of the web. Learners build projects in groups and present their work to peers and parents at graduation day.

## The Developer Community

Graduates join a free **developer community** where they mentor each other, build projects together and recommend each other for jobs. **Talent is evenly distributed but opportunity is not!**""",
        "excerpt": "An inside look at CodeImpact's structured learning journey, from visual programming to JavaScript mastery, designed to build wholesome developers for the global tech space.",
        "featured_image": "https://images.unsplash.com/photo-1522071820081-009f0129c71c?ixlib=rb-4.0.3&auto=format&fit=crop&w=500&h=300",
        "tags": ["Education", "Curriculum", "Youth Development", "Programming"],
        "published": True,
        "created_at": datetime(2021, 9, 11),
        "metadata": {"read_time": 7, "views": 1200, "author": SEED_AUTHOR},
    },
    {
        "id": "3",
        "title": "The Attention Economy and How It's Affecting Our Teens",
        "slug": "attention-economy-affecting-teens-part-one",
        "content": """# The Attention Economy and How It's Affecting Our Teens - Part One

There is a lot of discussion about how much data the big tech companies are collecting from us. How much damage is the attention economy causing to our young ones who are still in their formative years?

## What Can We Do as Parents?

### 1. Show Interest

Ask questions about what your child does online, listen carefully and do your own research. Build an **environment of trust**.

### 2. Be a Little Savvy

Learn the tools that help you understand what your child spends time on. We do not want to spy but to guide.

### 3. Live by Example

**Actions speak louder than words** and our children watch our actions way more than what we say.""",
        "excerpt": "Exploring how the attention economy impacts our teenagers and practical strategies parents can use to guide their children's technology use responsibly.",
        "featured_image": "https://images.unsplash.com/photo-1516321318423-f06f85e504b3?ixlib=rb-4.0.3&auto=format&fit=crop&w=500&h=300",
        "tags": ["Digital Parenting", "Attention Economy", "Youth", "Technology"],
        "published": True,
        "created_at": datetime(2021, 2, 20),
        "metadata": {"read_time": 6, "views": 950, "author": SEED_AUTHOR},
    },
    {
        "id": "4",
        "title": "Building a Technology Community That Harnesses Global Practitioners",
        "slug": "building-technology-community-uganda-global-practitioners",
        "content": """# A CodeImpact Case for Building a Technology Community in Uganda

CodeImpact believes in the power of technology to change lives and impact communities.

## Why Coding as a Literacy Skill?

**"Coding or computer programming teaches you how to think."** We encourage our learners to **think and tinker** and create a space where people are free to fail and learn from their mistakes.

## Building Towards One Million

Our goal is a **community of over one million technology practitioners and leaders** that learn from each other, build projects together, start companies together and recommend opportunities to each other.""",
        "excerpt": "CodeImpact's vision for building a million-strong technology community in Africa, focusing on coding as a literacy skill to create global tech leaders.",
        "featured_image": "https://images.unsplash.com/photo-1517180102446-f3ece451e9d8?ixlib=rb-4.0.3&auto=format&fit=crop&w=500&h=300",
        "tags": ["Community Building", "African Tech", "Vision", "Technology Education"],
        "published": True,
        "created_at": datetime(2020, 12, 2),
        "metadata": {"read_time": 8, "views": 1100, "author": SEED_AUTHOR},
    },
]
