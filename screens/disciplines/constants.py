# screens/disciplines/constants.py
COL_COURSE = "Curso"
COL_NAME = "Disciplina"
COL_COORDINATOR_LOGIN = "Login Coordenador"
COL_PROFESSOR_LOGIN = "Login Professor"
COL_TUTOR_LOGIN = "Login Tutor"
COL_MONTH_1 = "Mês 1"
COL_MONTH_2 = "Mês 2"

TEMPLATE_COLUMNS = [
    COL_COURSE, COL_NAME, COL_COORDINATOR_LOGIN, COL_PROFESSOR_LOGIN,
    COL_TUTOR_LOGIN, COL_MONTH_1, COL_MONTH_2,
]
REQUIRED_COLUMNS = [COL_COURSE, COL_NAME]

TEMPLATE_ROWS = [
    {COL_COURSE: "Mestrado em Ciência da Computação", COL_NAME: "Inteligência Artificial",
     COL_COORDINATOR_LOGIN: "joao.silva", COL_PROFESSOR_LOGIN: "carlos.souza",
     COL_TUTOR_LOGIN: "ana.costa", COL_MONTH_1: "3", COL_MONTH_2: "4"},
    {COL_COURSE: "MBA em Marketing Digital", COL_NAME: "Inteligência Artificial",
     COL_COORDINATOR_LOGIN: "", COL_PROFESSOR_LOGIN: "", COL_TUTOR_LOGIN: "",
     COL_MONTH_1: "", COL_MONTH_2: ""},
]

TEMPLATE_FILE_NAME = "modelo_disciplinas.xlsx"

# Person-login fields that can be edited inline from the overview
LOGIN_FIELDS = ("coordinator_login", "professor_login", "tutor_login")

SORT_ALPHABETICAL = "alphabetical"
SORT_MONTH = "month"
SORT_OPTIONS = {SORT_MONTH: "By month", SORT_ALPHABETICAL: "Alphabetical"}

# None is "no month"
MONTH_OPTIONS = [None] + list(range(1, 13))
