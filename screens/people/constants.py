# screens/people/constants.py
from core.constants import ROLE_COORDINATOR, ROLE_PROFESSOR, ROLE_TUTOR

COL_ROLE = "Tipo"
COL_FIRST_NAME = "First Name"
COL_LAST_NAME = "Last Name"
COL_EMAIL = "Email"
COL_LOGIN = "Login"
COL_COURSE = "Curso"

TEMPLATE_COLUMNS = [COL_ROLE, COL_FIRST_NAME, COL_LAST_NAME, COL_EMAIL, COL_LOGIN, COL_COURSE]
REQUIRED_COLUMNS = [COL_ROLE, COL_FIRST_NAME, COL_LAST_NAME, COL_EMAIL, COL_LOGIN]

TEMPLATE_ROWS = [
    {COL_ROLE: ROLE_PROFESSOR, COL_FIRST_NAME: "Carlos", COL_LAST_NAME: "Souza",
     COL_EMAIL: "carlos.souza@example.com", COL_LOGIN: "carlos.souza", COL_COURSE: ""},
    {COL_ROLE: ROLE_COORDINATOR, COL_FIRST_NAME: "João", COL_LAST_NAME: "Silva",
     COL_EMAIL: "joao.silva@example.com", COL_LOGIN: "joao.silva", COL_COURSE: ""},
    {COL_ROLE: ROLE_TUTOR, COL_FIRST_NAME: "Ana", COL_LAST_NAME: "Costa",
     COL_EMAIL: "ana.costa@example.com", COL_LOGIN: "ana.costa",
     COL_COURSE: "Mestrado em Ciência da Computação"},
]

TEMPLATE_FILE_NAME = "modelo_pessoas.xlsx"

ROLE_FILTER_ALL = "all"
