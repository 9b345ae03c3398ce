from ape import project
from ape.contracts import ContractInstance

from deployment.constants import ERC20_TEST, ERC20_TEST_TAG, YOUR_CONTRACT, YOUR_CONTRACT_TAG
from deployment.params import Deployer
from deployment.tasks import TaskRegistry
from deployment.token import print_token_metadata, read_token_metadata

tasks = TaskRegistry()


@tasks.register(YOUR_CONTRACT_TAG)
def deploy_your_contract(deployer: Deployer) -> ContractInstance:
    """Deploys YourContract, owned by the deployer account."""
    your_contract = deployer.deploy(project.YourContract, log=True, auto_mine=True)
    print("👋 Initial greeting:", your_contract.greeting())
    return your_contract


@tasks.register(ERC20_TEST_TAG)
def deploy_erc20_test(deployer: Deployer) -> ContractInstance:
    """
    Deploys ERC20Test with no constructor arguments, then reads back the
    token metadata and the greeting of the already deployed YourContract.
    """
    print(f"Deploying {ERC20_TEST} with deployer account {deployer.get_account().address}")
    deployer.deploy(project.ERC20Test, log=True, auto_mine=True)

    erc20_test = deployer.get_contract(ERC20_TEST)
    print_token_metadata(read_token_metadata(erc20_test))

    your_contract = deployer.get_contract(YOUR_CONTRACT)
    print("👋 Initial greeting:", your_contract.greeting())
    return erc20_test
