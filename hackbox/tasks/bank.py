"""Bundled challenges, seeded into the database on startup."""

from typing import Dict, List, Optional

from .models import Difficulty, Language, Task, TestCase


def _cases(task_id: str, *cases) -> tuple:
    """Build test cases from (input, expected, description, hidden) rows."""
    return tuple(
        TestCase(
            id=f"{task_id}-{i}",
            input=inp,
            expected_output=expected,
            description=description,
            is_hidden=hidden,
        )
        for i, (inp, expected, description, hidden) in enumerate(cases, start=1)
    )


TASKS: List[Task] = [
    Task(
        id="1",
        title="Hello World",
        description="Create your first function that returns a greeting message",
        difficulty=Difficulty.BEGINNER,
        language=Language.JAVASCRIPT,
        xp_reward=50,
        estimated_time=5,
        tags=("basics", "strings", "functions"),
        instructions=(
            'Write a function called "helloWorld" (Python: "hello_world") that '
            'returns the exact string "Hello, World!".\n\n'
            "Requirements:\n"
            "- Must return the exact string, including the comma and exclamation mark\n"
            "- No parameters needed"
        ),
        starter_code={
            "javascript": 'function helloWorld() {\n  // Return "Hello, World!" string\n  return ;\n}',
            "python": 'def hello_world():\n    # Return "Hello, World!" string\n    pass',
        },
        hints=(
            "Remember to use quotes around strings",
            "The return statement sends a value back from the function",
            "Make sure to include the comma and exclamation mark exactly as shown",
        ),
        test_cases=_cases(
            "1",
            ("", "Hello, World!", "Basic greeting test", False),
            ("", "Hello, World!", "Exact string match validation", True),
        ),
    ),
    Task(
        id="2",
        title="Sum Calculator",
        description="Build a function that adds two numbers together",
        difficulty=Difficulty.BEGINNER,
        language=Language.JAVASCRIPT,
        xp_reward=75,
        estimated_time=10,
        tags=("math", "arithmetic", "parameters"),
        instructions=(
            'Create a function called "sum" that takes two parameters (a and b) '
            "and returns their sum.\n\n"
            "Requirements:\n"
            "- Must accept two parameters: a and b\n"
            "- Should work with both positive and negative numbers"
        ),
        starter_code={
            "javascript": "function sum(a, b) {\n  // Add the two parameters together and return the result\n  return ;\n}",
            "python": "def sum(a, b):\n    # Add the two parameters together and return the result\n    pass",
        },
        hints=(
            "Use the + operator to add numbers",
            "Parameters are the variables listed in the function definition",
        ),
        test_cases=_cases(
            "2",
            ("2,3", "5", "Basic addition test", False),
            ("10,15", "25", "Larger numbers test", False),
            ("-5,3", "-2", "Negative numbers test", True),
            ("0,0", "0", "Zero test", True),
        ),
    ),
    Task(
        id="3",
        title="Array Maximum",
        description="Find the largest number in an array",
        difficulty=Difficulty.EASY,
        language=Language.JAVASCRIPT,
        xp_reward=125,
        estimated_time=15,
        tags=("arrays", "loops", "comparison"),
        instructions=(
            'Write a function called "findMax" (Python: "find_max") that takes an '
            "array of numbers and returns the maximum value.\n\n"
            "Requirements:\n"
            "- Should handle positive, negative, and zero values\n"
            "- The array always has at least one element"
        ),
        starter_code={
            "javascript": "function findMax(numbers) {\n  // Find and return the maximum number in the array\n  \n}",
            "python": "def find_max(numbers):\n    # Find and return the maximum number in the list\n    pass",
        },
        hints=(
            "Loop through the array comparing each value to the maximum so far",
            "Start with the first element as your initial maximum value",
        ),
        test_cases=_cases(
            "3",
            ("[1,5,3,9,2]", "9", "Basic maximum test", False),
            ("[100]", "100", "Single element test", False),
            ("[-1,-5,-3]", "-1", "Negative numbers test", True),
            ("[0,0,0]", "0", "All zeros test", True),
        ),
    ),
    Task(
        id="4",
        title="Palindrome Checker",
        description="Determine if a string reads the same forwards and backwards",
        difficulty=Difficulty.MEDIUM,
        language=Language.JAVASCRIPT,
        xp_reward=200,
        estimated_time=20,
        tags=("strings", "logic", "comparison"),
        instructions=(
            'Create a function called "isPalindrome" (Python: "is_palindrome") '
            "that checks if a string is a palindrome, ignoring spaces, "
            "punctuation and case.\n\n"
            'Examples: "racecar" -> true, "race a car" -> false'
        ),
        starter_code={
            "javascript": "function isPalindrome(str) {\n  // Check if string is the same forwards and backwards\n  \n}",
            "python": "def is_palindrome(s):\n    # Check if string is the same forwards and backwards\n    pass",
        },
        hints=(
            "Convert the string to lowercase first",
            "Keep only letters and digits before comparing",
            "Compare the cleaned string with its reversed version",
        ),
        test_cases=_cases(
            "4",
            ("racecar", "true", "Simple palindrome test", False),
            ("hello", "false", "Not palindrome test", False),
            ("A man a plan a canal Panama", "true", "Complex palindrome with spaces", True),
        ),
    ),
    Task(
        id="5",
        title="Fibonacci Generator",
        description="Generate the nth Fibonacci number",
        difficulty=Difficulty.MEDIUM,
        language=Language.JAVASCRIPT,
        xp_reward=250,
        estimated_time=25,
        tags=("recursion", "iteration", "sequences"),
        instructions=(
            'Write a function called "fibonacci" that returns the nth number in '
            "the Fibonacci sequence (0, 1, 1, 2, 3, 5, 8, ...).\n\n"
            "fibonacci(0) = 0, fibonacci(1) = 1, fibonacci(10) = 55"
        ),
        starter_code={
            "javascript": "function fibonacci(n) {\n  // Generate the nth Fibonacci number\n  \n}",
            "python": "def fibonacci(n):\n    # Generate the nth Fibonacci number\n    pass",
        },
        hints=(
            "Each number is the sum of the two before it: F(n) = F(n-1) + F(n-2)",
            "For efficiency, use an iterative approach with two variables",
            "Handle the base cases first: n=0 returns 0, n=1 returns 1",
        ),
        test_cases=_cases(
            "5",
            ("0", "0", "F(0) test", False),
            ("1", "1", "F(1) test", False),
            ("5", "5", "F(5) test", False),
            ("10", "55", "F(10) test", True),
        ),
    ),
    Task(
        id="6",
        title="Binary Search",
        description="Implement binary search algorithm",
        difficulty=Difficulty.HARD,
        language=Language.JAVASCRIPT,
        xp_reward=350,
        estimated_time=35,
        tags=("algorithms", "searching", "optimization"),
        instructions=(
            'Implement a function called "binarySearch" (Python: "binary_search") '
            "that returns the index of target in a sorted array, or -1 if it is "
            "not present. Use binary search, not a linear scan."
        ),
        starter_code={
            "javascript": "function binarySearch(arr, target) {\n  // Implement binary search algorithm\n  \n}",
            "python": "def binary_search(arr, target):\n    # Implement binary search algorithm\n    pass",
        },
        hints=(
            "Use two pointers, left and right, to track the search boundaries",
            "Calculate the middle index with integer division",
            "Eliminate half the search space in each iteration",
        ),
        test_cases=_cases(
            "6",
            ("[1,3,5,7,9],5", "2", "Found element test", False),
            ("[1,3,5,7,9],4", "-1", "Not found test", False),
            ("[1],1", "0", "Single element found", True),
            ("[1],2", "-1", "Single element not found", True),
        ),
    ),
    Task(
        id="7",
        title="Two Sum",
        description="Find two numbers in an array that add up to a target sum",
        difficulty=Difficulty.MEDIUM,
        language=Language.JAVASCRIPT,
        xp_reward=225,
        estimated_time=20,
        tags=("arrays", "hash-maps", "algorithms"),
        instructions=(
            'Write a function called "twoSum" (Python: "two_sum") that returns the '
            "indices of the two numbers that add up to target, in ascending order.\n\n"
            "Example: twoSum([2,7,11,15], 9) -> [0,1]"
        ),
        starter_code={
            "javascript": "function twoSum(nums, target) {\n  // Find two numbers that add up to target\n  \n}",
            "python": "def two_sum(nums, target):\n    # Find two numbers that add up to target\n    pass",
        },
        hints=(
            "Store values and their indices in a hash map as you iterate",
            "For each number, check if (target - number) is already in the map",
        ),
        test_cases=_cases(
            "7",
            ("[2,7,11,15],9", "[0,1]", "Basic two sum test", False),
            ("[3,2,4],6", "[1,2]", "Different indices test", False),
            ("[3,3],6", "[0,1]", "Duplicate numbers test", True),
        ),
    ),
    Task(
        id="8",
        title="Valid Parentheses",
        description="Check if parentheses are properly balanced",
        difficulty=Difficulty.EASY,
        language=Language.JAVASCRIPT,
        xp_reward=150,
        estimated_time=15,
        tags=("stacks", "strings", "validation"),
        instructions=(
            'Create a function called "isValid" (Python: "is_valid") that '
            "determines whether a string of brackets ()[]{} is properly balanced "
            "and nested."
        ),
        starter_code={
            "javascript": "function isValid(s) {\n  // Check if parentheses are properly balanced\n  \n}",
            "python": "def is_valid(s):\n    # Check if parentheses are properly balanced\n    pass",
        },
        hints=(
            "Use a stack to keep track of opening brackets",
            "When you see a closing bracket, check it matches the top of the stack",
            "The string is valid if the stack is empty at the end",
        ),
        test_cases=_cases(
            "8",
            ("()", "true", "Simple parentheses test", False),
            ("()[]{}", "true", "Multiple bracket types test", False),
            ("(]", "false", "Mismatched brackets test", True),
            ("([)]", "false", "Interleaved brackets test", True),
        ),
    ),
]

_BY_ID: Dict[str, Task] = {task.id: task for task in TASKS}


def get_task(task_id: str) -> Optional[Task]:
    """Look up a bundled task by id."""
    return _BY_ID.get(task_id)
