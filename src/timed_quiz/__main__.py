from timed_quiz.cli import main

main()
