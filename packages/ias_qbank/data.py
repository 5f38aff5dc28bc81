"""
Built-in fallback questions and role competency profiles.
"""

FALLBACK_QUESTIONS = [
    # Software Engineer
    {
        "id": "fallback_1",
        "position": "Software Engineer",
        "category": "technical",
        "difficulty": "easy",
        "text": "What is the difference between let, const, and var in JavaScript?",
        "expected_keywords": ["block scope", "hoisting", "reassignment", "ES6"],
        "sample_answers": [
            "let and const are block-scoped, var is function-scoped. const cannot be reassigned, "
            "let can be reassigned but not redeclared, var can be both reassigned and redeclared.",
            "let and const were introduced in ES6 and have block scope, while var has function scope and is hoisted.",
        ],
        "time_limit": 180,
        "max_score": 10,
    },
    {
        "id": "fallback_2",
        "position": "Software Engineer",
        "category": "technical",
        "difficulty": "easy",
        "text": "Explain what a REST API is and its main principles.",
        "expected_keywords": ["stateless", "HTTP methods", "resources", "uniform interface"],
        "sample_answers": [
            "REST is an architectural style for designing networked applications. "
            "It uses HTTP methods (GET, POST, PUT, DELETE) and is stateless.",
            "REST APIs follow principles like statelessness, uniform interface, and resource-based URLs.",
        ],
        "time_limit": 180,
        "max_score": 10,
    },
    {
        "id": "fallback_3",
        "position": "Software Engineer",
        "category": "technical",
        "difficulty": "medium",
        "text": "How would you optimize a slow database query?",
        "expected_keywords": ["indexing", "query optimization", "execution plan", "normalization"],
        "sample_answers": [
            "I would analyze the execution plan, add appropriate indexes, optimize the query structure, "
            "and consider database normalization.",
            "Start by examining the execution plan, then add indexes on frequently queried columns, "
            "and optimize the WHERE clause.",
        ],
        "time_limit": 240,
        "max_score": 10,
    },
    {
        "id": "fallback_4",
        "position": "Software Engineer",
        "category": "technical",
        "difficulty": "hard",
        "text": "Design a scalable microservices architecture for an e-commerce platform.",
        "expected_keywords": ["service discovery", "load balancing", "circuit breaker", "API gateway"],
        "sample_answers": [
            "I would design separate services for user management, product catalog, order processing, and payment. "
            "Use API gateway for routing, service discovery for communication, and implement circuit breakers.",
            "Break down into domain services, implement API gateway, use message queues for async communication, "
            "and add monitoring and logging.",
        ],
        "time_limit": 300,
        "max_score": 10,
    },
    {
        "id": "fallback_5",
        "position": "Software Engineer",
        "category": "behavioral",
        "difficulty": "easy",
        "text": "Tell me about a time when you had to learn a new technology quickly.",
        "expected_keywords": ["learning", "adaptability", "problem-solving", "time management"],
        "sample_answers": [
            "I had to learn React for a project. I started with official docs, built a small project, and practiced daily.",
            "When my team adopted Docker, I spent weekends learning it through tutorials and hands-on practice.",
        ],
        "time_limit": 180,
        "max_score": 10,
    },
    {
        "id": "fallback_6",
        "position": "Software Engineer",
        "category": "behavioral",
        "difficulty": "medium",
        "text": "Describe a situation where you had to work with a difficult team member.",
        "expected_keywords": ["communication", "conflict resolution", "teamwork", "empathy"],
        "sample_answers": [
            "I had a teammate who was resistant to code reviews. I scheduled a one-on-one to understand "
            "their concerns and found a compromise.",
            "I worked with someone who was very critical. I focused on constructive feedback and helped "
            "them understand the team's goals.",
        ],
        "time_limit": 240,
        "max_score": 10,
    },
    {
        "id": "fallback_7",
        "position": "Software Engineer",
        "category": "behavioral",
        "difficulty": "hard",
        "text": "How would you handle a situation where your team is behind schedule on a critical project?",
        "expected_keywords": ["project management", "communication", "prioritization", "leadership"],
        "sample_answers": [
            "I would assess the situation, communicate with stakeholders, reprioritize tasks, "
            "and potentially request additional resources.",
            "First, I'd analyze why we're behind, then communicate transparently with stakeholders "
            "and adjust the project plan accordingly.",
        ],
        "time_limit": 300,
        "max_score": 10,
    },
    # Data Scientist
    {
        "id": "fallback_8",
        "position": "Data Scientist",
        "category": "technical",
        "difficulty": "easy",
        "text": "What is the difference between supervised and unsupervised learning?",
        "expected_keywords": ["labeled data", "target variable", "clustering", "classification"],
        "sample_answers": [
            "Supervised learning uses labeled data to predict outcomes, while unsupervised learning "
            "finds patterns in unlabeled data.",
            "In supervised learning, we have a target variable to predict. In unsupervised learning, "
            "we discover hidden patterns.",
        ],
        "time_limit": 180,
        "max_score": 10,
    },
    {
        "id": "fallback_9",
        "position": "Data Scientist",
        "category": "technical",
        "difficulty": "medium",
        "text": "How would you handle missing data in a dataset?",
        "expected_keywords": ["imputation", "deletion", "analysis", "domain knowledge"],
        "sample_answers": [
            "I would first analyze the pattern of missing data, then use appropriate imputation methods "
            "or deletion based on the percentage and pattern.",
            "Start by understanding why data is missing, then choose between imputation, deletion, "
            "or advanced methods based on the context.",
        ],
        "time_limit": 240,
        "max_score": 10,
    },
]


ROLE_COMPETENCY_PROFILES = {
    "Software Engineer": {
        "entry": [
            "Basic programming concepts",
            "Data structures and algorithms",
            "Version control (Git)",
            "Basic debugging skills",
            "Understanding of software development lifecycle",
        ],
        "mid": [
            "Advanced programming concepts",
            "System design principles",
            "Database design and optimization",
            "API design and development",
            "Testing methodologies",
            "Performance optimization",
            "Code review and mentoring",
        ],
        "senior": [
            "Architecture design",
            "Technical leadership",
            "System scalability",
            "Security best practices",
            "Team management",
            "Project planning",
            "Cross-functional collaboration",
        ],
    },
    "Data Scientist": {
        "entry": [
            "Statistical analysis",
            "Data manipulation",
            "Basic machine learning",
            "Data visualization",
            "Python/R programming",
        ],
        "mid": [
            "Advanced machine learning",
            "Deep learning",
            "Big data technologies",
            "Model deployment",
            "A/B testing",
            "Feature engineering",
            "Data pipeline design",
        ],
        "senior": [
            "MLOps and model lifecycle",
            "Advanced statistical modeling",
            "Business strategy alignment",
            "Team leadership",
            "Research and innovation",
            "Stakeholder communication",
        ],
    },
    "Product Manager": {
        "entry": [
            "Product strategy basics",
            "User research",
            "Requirements gathering",
            "Agile methodologies",
            "Basic analytics",
        ],
        "mid": [
            "Product roadmap planning",
            "Cross-functional leadership",
            "Market analysis",
            "User experience design",
            "Data-driven decision making",
            "Stakeholder management",
        ],
        "senior": [
            "Product vision and strategy",
            "Team leadership",
            "Business model development",
            "Strategic partnerships",
            "Executive communication",
            "Product portfolio management",
        ],
    },
    "UX Designer": {
        "entry": [
            "Design principles",
            "User research basics",
            "Wireframing and prototyping",
            "Design tools (Figma, Sketch)",
            "Usability testing",
        ],
        "mid": [
            "Advanced user research",
            "Information architecture",
            "Interaction design",
            "Design systems",
            "User testing methodologies",
            "Cross-platform design",
        ],
        "senior": [
            "Design strategy",
            "Team leadership",
            "Design operations",
            "Stakeholder collaboration",
            "Design thinking facilitation",
            "Innovation and trends",
        ],
    },
    "Marketing Manager": {
        "entry": [
            "Marketing fundamentals",
            "Digital marketing channels",
            "Content creation",
            "Basic analytics",
            "Campaign management",
        ],
        "mid": [
            "Marketing strategy",
            "Brand management",
            "Customer segmentation",
            "Marketing automation",
            "Performance marketing",
            "Team coordination",
        ],
        "senior": [
            "Marketing leadership",
            "Strategic planning",
            "Budget management",
            "Stakeholder relations",
            "Market expansion",
            "Team development",
        ],
    },
}

# Scripted bookend questions
INTRO_KEYWORDS = ["background", "motivation", "interest", "experience"]
SALARY_KEYWORDS = ["salary", "expectations", "compensation", "negotiation"]
SCRIPTED_TIME_LIMIT = 180
SCRIPTED_MAX_SCORE = 10
